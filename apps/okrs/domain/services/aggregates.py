# apps/okrs/domain/services/aggregates.py
import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from apps.okrs.domain.entities import (
    PACE_SEVERITY,
    CheckIn,
    KeyResult,
    KrConfig,
    KrDirection,
    KrAggregation,
    KrRollupItem,
    KrType,
    Objective,
    ObjectiveProgress,
    PaceStatus,
    PlanProgress,
    ProgressResult,
    QuarterProgress,
    QuarterProgressSummary,
    QuarterTarget,
    Task,
    TimeWindow,
    TrackingSource,
)
from apps.okrs.domain.services.current_value import compute_current_value
from apps.okrs.domain.services.filters import (
    filter_check_ins_in_window,
    filter_completed_tasks_in_window,
    filter_linked_to_quarter_target,
)
from apps.okrs.domain.services.forecast import compute_forecast, compute_milestone_forecast_date
from apps.okrs.domain.services.pace import (
    classify_pace_status,
    compute_expected_progress,
    compute_expected_value,
    compute_pace_ratio,
)
from apps.okrs.domain.services.progress import (
    compute_baseline,
    compute_delta,
    compute_milestone_progress_with_tasks,
    compute_progress,
)
from apps.okrs.domain.services.time_utils import days_between, get_current_quarter, get_quarter_dates, parse_date, to_utc
from apps.okrs.domain.services.windows import (
    get_annual_kr_period,
    get_annual_kr_window,
    get_quarter_target_period,
    get_quarter_target_window,
)

logger = logging.getLogger(__name__)

ON_TRACK_STATUSES = (PaceStatus.AHEAD, PaceStatus.ON_TRACK)


def compute_kr_progress(
        kr: KeyResult,
        check_ins: Sequence[CheckIn],
        tasks: Sequence[Task],
        year: int,
        as_of: datetime,
        config: Optional[KrConfig] = None
    ) -> ProgressResult:
    """Pełny wynik dla rocznego KR (okno: rok do as_of, tempo liczone względem całego roku)."""
    as_of = to_utc(as_of)
    window = get_annual_kr_window(kr, year, as_of)
    period = get_annual_kr_period(year)

    result = _build_progress_result(
        kr, check_ins, tasks,
        window=window,
        period=period,
        as_of=as_of,
        baseline=compute_baseline(kr),
        target=kr.target_value,
        config=config or KrConfig(),
    )
    logger.debug("KR %s progress=%.3f pace=%s", kr.id, result.progress, result.pace_status.value)
    return result


def compute_quarter_target_progress(
        quarter_target: QuarterTarget,
        kr: KeyResult,
        check_ins: Sequence[CheckIn],
        tasks: Sequence[Task],
        year: int,
        as_of: datetime,
        config: Optional[KrConfig] = None
    ) -> ProgressResult:
    """Jak compute_kr_progress, ale tylko obserwacje podpięte pod dany cel kwartalny."""
    as_of = to_utc(as_of)
    window = get_quarter_target_window(quarter_target, kr, year, as_of)
    period = get_quarter_target_period(quarter_target, kr, year)

    linked_check_ins = filter_linked_to_quarter_target(check_ins, quarter_target.id)
    linked_tasks = filter_linked_to_quarter_target(tasks, quarter_target.id)

    return _build_progress_result(
        kr, linked_check_ins, linked_tasks,
        window=window,
        period=period,
        as_of=as_of,
        baseline=_quarter_baseline(kr),
        target=quarter_target.target_value,
        config=config or KrConfig(),
    )


def _quarter_baseline(kr: KeyResult) -> float:
    # Reset kwartalny przy wzroście: każdy kwartał liczymy od zera
    if kr.aggregation == KrAggregation.RESET_QUARTERLY and kr.direction == KrDirection.INCREASE:
        return 0
    return compute_baseline(kr)


def _build_progress_result(
        kr: KeyResult,
        check_ins: Sequence[CheckIn],
        tasks: Sequence[Task],
        window: TimeWindow,
        period: TimeWindow,
        as_of: datetime,
        baseline: float,
        target: float,
        config: KrConfig
    ) -> ProgressResult:
    window_check_ins = filter_check_ins_in_window(check_ins, window)
    window_tasks = filter_completed_tasks_in_window(tasks, window)

    current = compute_current_value(kr, check_ins, tasks, window, config)

    # 1. Postęp
    tracks_tasks = config.tracking_source in (TrackingSource.TASKS, TrackingSource.MIXED)
    is_task_milestone = kr.kr_type == KrType.MILESTONE and tracks_tasks
    if is_task_milestone:
        is_complete = any(ci.value >= 1 for ci in window_check_ins)
        progress = compute_milestone_progress_with_tasks(current, len(window_tasks), len(tasks), is_complete)
    else:
        progress = compute_progress(kr.kr_type, kr.direction, current, baseline, target, config)

    # 2. Tempo (względem pełnego okresu, nie okna obciętego do as_of)
    expected_progress = compute_expected_progress(as_of, period)
    expected_value = compute_expected_value(expected_progress, baseline, target, kr.direction)
    pace_ratio = compute_pace_ratio(progress, expected_progress)

    # 3. Prognoza
    forecast_value = compute_forecast(kr.kr_type, baseline, current, period, as_of)
    forecast_date = None
    if is_task_milestone:
        forecast_date = compute_milestone_forecast_date(len(window_tasks), len(tasks), period, as_of)

    # 4. Ostatnia obserwacja
    observed = [parse_date(ci.recorded_at) for ci in window_check_ins]
    last_observation_date = max(observed) if observed else None

    return ProgressResult(
        current_value=current,
        baseline=baseline,
        target=target,
        progress=progress,
        delta=compute_delta(current, target, kr.direction),
        expected_progress=expected_progress,
        expected_value=expected_value,
        pace_ratio=pace_ratio,
        pace_status=classify_pace_status(pace_ratio),
        forecast_value=forecast_value,
        forecast_date=forecast_date,
        days_elapsed=max(0, days_between(period.start, as_of)),
        days_remaining=max(0, days_between(as_of, period.end)),
        last_observation_date=last_observation_date,
    )


def compute_quarter_progress(
        quarter_target: QuarterTarget,
        kr: KeyResult,
        check_ins: Sequence[CheckIn],
        year: int,
        as_of: datetime
    ) -> QuarterProgress:
    """Wynik celu kwartalnego + ramy czasowe (przeszły / bieżący / przyszły kwartał)."""
    as_of = to_utc(as_of)
    result = compute_quarter_target_progress(quarter_target, kr, check_ins, [], year, as_of)
    quarter_dates = get_quarter_dates(year, quarter_target.quarter)

    is_past = as_of > quarter_dates.end
    is_future = as_of < quarter_dates.start
    is_current = not is_past and not is_future

    expected_progress = result.expected_progress
    days_elapsed = result.days_elapsed
    days_remaining = result.days_remaining
    if is_past:
        expected_progress = 1.0
        days_remaining = 0
    elif is_future:
        expected_progress = 0.0
        days_elapsed = 0

    pace_ratio = compute_pace_ratio(result.progress, expected_progress)

    return QuarterProgress(
        quarter=quarter_target.quarter,
        target=quarter_target.target_value,
        current_value=result.current_value,
        progress=result.progress,
        expected_progress=expected_progress,
        pace_ratio=pace_ratio,
        pace_status=classify_pace_status(pace_ratio),
        days_elapsed=days_elapsed,
        days_remaining=days_remaining,
        is_past=is_past,
        is_current=is_current,
        is_future=is_future,
    )


def compute_all_quarters_progress(
        quarter_targets: Sequence[QuarterTarget],
        kr: KeyResult,
        check_ins: Sequence[CheckIn],
        year: int,
        as_of: datetime
    ) -> List[QuarterProgress]:
    ordered = sorted(quarter_targets, key=lambda qt: qt.quarter)
    return [compute_quarter_progress(qt, kr, check_ins, year, as_of) for qt in ordered]


def get_quarter_progress_summary(
        quarter_targets: Sequence[QuarterTarget],
        kr: KeyResult,
        check_ins: Sequence[CheckIn],
        year: int,
        as_of: datetime
    ) -> QuarterProgressSummary:
    """
    Podsumowanie kwartałów KR.
    "On track na rok" = wszystkie minione kwartały domknięte i bieżący kwartał w tempie (ahead / on_track).
    """
    as_of = to_utc(as_of)
    quarters = compute_all_quarters_progress(quarter_targets, kr, check_ins, year, as_of)

    current = next((q for q in quarters if q.is_current), None)
    past = [q for q in quarters if q.is_past]
    completed = [q for q in quarters if q.is_complete and not q.is_future]

    if not quarters:
        is_on_track = False
    else:
        past_done = all(q.is_complete for q in past)
        current_ok = current is None or current.pace_status in ON_TRACK_STATUSES
        is_on_track = past_done and current_ok

    return QuarterProgressSummary(
        quarters=quarters,
        current_quarter=get_current_quarter(as_of) if as_of.year == year else None,
        current_quarter_progress=current,
        completed_quarters=len(completed),
        past_quarters=len(past),
        is_on_track_for_year=is_on_track,
    )


def _worst_pace_status(statuses) -> PaceStatus:
    return max(statuses, key=lambda status: PACE_SEVERITY[PaceStatus(status)])


def compute_objective_progress(
        objective: Objective,
        kr_progresses: Sequence[Tuple[KeyResult, ProgressResult]]
    ) -> ObjectiveProgress:
    """Średnia (bez wag) z KR-ów celu. Pusty cel nigdy nie jest "on track"."""
    if not kr_progresses:
        return ObjectiveProgress(
            objective_id=objective.id,
            progress=0.0,
            expected_progress=0.0,
            pace_status=PaceStatus.OFF_TRACK,
            kr_count=0,
            kr_progresses=[],
        )

    items = [
        KrRollupItem(kr_id=kr.id, progress=result.progress, pace_status=result.pace_status)
        for kr, result in kr_progresses
    ]
    count = len(kr_progresses)

    return ObjectiveProgress(
        objective_id=objective.id,
        progress=sum(result.progress for _, result in kr_progresses) / count,
        expected_progress=sum(result.expected_progress for _, result in kr_progresses) / count,
        pace_status=_worst_pace_status(item.pace_status for item in items),
        kr_count=count,
        kr_progresses=items,
    )


def compute_plan_progress(plan_id: str, objective_progresses: Sequence[ObjectiveProgress]) -> PlanProgress:
    if not objective_progresses:
        return PlanProgress(
            plan_id=plan_id,
            progress=0.0,
            expected_progress=0.0,
            pace_status=PaceStatus.OFF_TRACK,
            objective_count=0,
            objective_progresses=[],
        )

    count = len(objective_progresses)
    return PlanProgress(
        plan_id=plan_id,
        progress=sum(op.progress for op in objective_progresses) / count,
        expected_progress=sum(op.expected_progress for op in objective_progresses) / count,
        pace_status=_worst_pace_status(op.pace_status for op in objective_progresses),
        objective_count=count,
        objective_progresses=list(objective_progresses),
    )
