from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

import pytz


class KrType(str, Enum):
    METRIC = 'metric'
    COUNT = 'count'
    MILESTONE = 'milestone'
    RATE = 'rate'
    AVERAGE = 'average'


class KrDirection(str, Enum):
    INCREASE = 'increase'
    DECREASE = 'decrease'
    MAINTAIN = 'maintain'


class KrAggregation(str, Enum):
    CUMULATIVE = 'cumulative'
    RESET_QUARTERLY = 'reset_quarterly'


class TrackingSource(str, Enum):
    CHECK_INS = 'check_ins'
    TASKS = 'tasks'
    MIXED = 'mixed'


class PaceStatus(str, Enum):
    AHEAD = 'ahead'
    ON_TRACK = 'on_track'
    AT_RISK = 'at_risk'
    OFF_TRACK = 'off_track'


class TaskStatus(str, Enum):
    PENDING = 'pending'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


# Kolejność "od najlepszego" - używana przy rollupach (najgorszy status wygrywa)
PACE_SEVERITY = {
    PaceStatus.AHEAD: 0,
    PaceStatus.ON_TRACK: 1,
    PaceStatus.AT_RISK: 2,
    PaceStatus.OFF_TRACK: 3,
}


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return pytz.UTC.localize(moment)
    return moment.astimezone(pytz.UTC)


@dataclass(frozen=True)
class KeyResult:
    kr_type: KrType
    direction: KrDirection = KrDirection.INCREASE
    aggregation: KrAggregation = KrAggregation.CUMULATIVE
    unit: Optional[str] = None
    start_value: float = 0
    target_value: float = 0
    current_value: float = 0

    id: Optional[str] = None
    objective_id: Optional[str] = None
    name: str = ""

    def __post_init__(self):
        # Nieznany typ/kierunek to błąd programisty - Enum rzuca ValueError
        object.__setattr__(self, 'kr_type', KrType(self.kr_type))
        object.__setattr__(self, 'direction', KrDirection(self.direction))
        object.__setattr__(self, 'aggregation', KrAggregation(self.aggregation))


@dataclass(frozen=True)
class CheckIn:
    value: float
    recorded_at: Any  # datetime / date / ISO string
    quarter_target_id: Optional[str] = None

    id: Optional[str] = None
    annual_kr_id: Optional[str] = None


@dataclass(frozen=True)
class Task:
    status: TaskStatus
    completed_at: Any = None  # datetime / date / ISO string
    quarter_target_id: Optional[str] = None

    id: Optional[str] = None
    annual_kr_id: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


@dataclass(frozen=True)
class QuarterTarget:
    quarter: int  # 1-4
    target_value: float
    current_value: float = 0

    id: Optional[str] = None
    annual_kr_id: Optional[str] = None

    def __post_init__(self):
        if self.quarter not in (1, 2, 3, 4):
            raise ValueError(f"Quarter must be 1-4, got {self.quarter!r}")


@dataclass(frozen=True)
class Objective:
    id: str
    plan_id: Optional[str] = None
    code: str = ""
    name: str = ""


@dataclass(frozen=True)
class KrConfig:
    tracking_source: TrackingSource = TrackingSource.CHECK_INS
    tolerance_band: Optional[float] = None  # tylko dla kierunku "maintain"

    def __post_init__(self):
        object.__setattr__(self, 'tracking_source', TrackingSource(self.tracking_source))


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    end: datetime  # obie granice włącznie

    def __post_init__(self):
        # Wszystko w UTC, żeby nie mieszać naive/aware przy porównaniach
        object.__setattr__(self, 'start', as_utc(self.start))
        object.__setattr__(self, 'end', as_utc(self.end))

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class ProgressResult:
    current_value: float
    baseline: float
    target: float
    progress: float  # 0.0 - 1.0
    delta: float
    expected_progress: float
    expected_value: float
    pace_ratio: float
    pace_status: PaceStatus
    forecast_value: Optional[float]
    forecast_date: Optional[datetime]
    days_elapsed: int
    days_remaining: int
    last_observation_date: Optional[datetime]


@dataclass(frozen=True)
class DailyDataPoint:
    date: datetime
    current_value: float
    progress: float
    expected_progress: float
    pace_ratio: float
    pace_status: PaceStatus
    check_in_count: int


@dataclass(frozen=True)
class QuarterProgress:
    quarter: int
    target: float
    current_value: float
    progress: float
    expected_progress: float
    pace_ratio: float
    pace_status: PaceStatus
    days_elapsed: int
    days_remaining: int
    is_past: bool
    is_current: bool
    is_future: bool

    @property
    def is_complete(self) -> bool:
        return self.progress >= 1


@dataclass(frozen=True)
class QuarterProgressSummary:
    quarters: List[QuarterProgress]
    current_quarter: Optional[int]
    current_quarter_progress: Optional[QuarterProgress]
    completed_quarters: int
    past_quarters: int
    is_on_track_for_year: bool


@dataclass(frozen=True)
class KrRollupItem:
    kr_id: Optional[str]
    progress: float
    pace_status: PaceStatus


@dataclass(frozen=True)
class ObjectiveProgress:
    objective_id: str
    progress: float
    expected_progress: float
    pace_status: PaceStatus
    kr_count: int
    kr_progresses: List[KrRollupItem] = field(default_factory=list)


@dataclass(frozen=True)
class PlanProgress:
    plan_id: str
    progress: float
    expected_progress: float
    pace_status: PaceStatus
    objective_count: int
    objective_progresses: List[ObjectiveProgress] = field(default_factory=list)
