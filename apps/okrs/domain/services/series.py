# apps/okrs/domain/services/series.py
from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from dateutil.relativedelta import SU, relativedelta

from apps.okrs.domain.entities import CheckIn, DailyDataPoint, KeyResult, KrType, TimeWindow
from apps.okrs.domain.services.filters import filter_check_ins_in_window, sort_check_ins_chronologically
from apps.okrs.domain.services.pace import classify_pace_status, compute_expected_progress, compute_pace_ratio
from apps.okrs.domain.services.progress import compute_baseline, compute_progress
from apps.okrs.domain.services.time_utils import end_of_day, parse_date, start_of_day


@dataclass(frozen=True)
class RunningValue:
    value: float
    total: float = 0.0
    count: int = 0


class LatestValueStrategy:
    """metric / rate / milestone: ostatni znany check-in, przed pierwszym - wartość startowa."""

    def seed(self, kr: KeyResult) -> RunningValue:
        return RunningValue(value=kr.start_value if kr.kr_type != KrType.MILESTONE else 0)

    def fold(self, acc: RunningValue, day_check_ins: List[CheckIn]) -> RunningValue:
        if not day_check_ins:
            return acc
        return replace(acc, value=day_check_ins[-1].value)


class RunningSumStrategy:
    """
    count: suma narastająco.
    Przed pierwszym check-inem punkt pokazuje start_value, ale suma zaczyna się od zera
    (tak jak compute_current_value dla count). Przy niezerowym start_value wykres
    spada więc do samej sumy w dniu pierwszego check-inu.
    """

    def seed(self, kr: KeyResult) -> RunningValue:
        return RunningValue(value=kr.start_value)

    def fold(self, acc: RunningValue, day_check_ins: List[CheckIn]) -> RunningValue:
        if not day_check_ins:
            return acc
        total = acc.total + sum(ci.value for ci in day_check_ins)
        return RunningValue(value=total, total=total, count=acc.count + len(day_check_ins))


class RunningAverageStrategy:
    """average: średnia wszystkich check-inów do danego dnia włącznie."""

    def seed(self, kr: KeyResult) -> RunningValue:
        return RunningValue(value=kr.start_value)

    def fold(self, acc: RunningValue, day_check_ins: List[CheckIn]) -> RunningValue:
        if not day_check_ins:
            return acc
        total = acc.total + sum(ci.value for ci in day_check_ins)
        count = acc.count + len(day_check_ins)
        return RunningValue(value=total / count, total=total, count=count)


SERIES_STRATEGIES = {
    KrType.METRIC: LatestValueStrategy(),
    KrType.RATE: LatestValueStrategy(),
    KrType.MILESTONE: LatestValueStrategy(),
    KrType.COUNT: RunningSumStrategy(),
    KrType.AVERAGE: RunningAverageStrategy(),
}


def _group_by_day(check_ins: Sequence[CheckIn]) -> Dict[datetime, List[CheckIn]]:
    grouped = defaultdict(list)
    for check_in in sort_check_ins_chronologically(check_ins):
        grouped[start_of_day(parse_date(check_in.recorded_at))].append(check_in)
    return grouped


def build_daily_series(
        kr: KeyResult,
        check_ins: Sequence[CheckIn],
        window: TimeWindow,
        period: Optional[TimeWindow] = None
    ) -> List[DailyDataPoint]:
    """
    Jeden punkt na każdy dzień kalendarzowy okna [start, end].
    Oczekiwany postęp liczony względem period (domyślnie samo okno), na koniec dnia,
    a dla ostatniego dnia na window.end - tak jak w compute_kr_progress.
    """
    period = period or window
    strategy = SERIES_STRATEGIES[KrType(kr.kr_type)]
    by_day = _group_by_day(filter_check_ins_in_window(check_ins, window))
    baseline = compute_baseline(kr)

    series = []
    acc = strategy.seed(kr)
    day = start_of_day(window.start)

    while day <= window.end:
        day_check_ins = by_day.get(day, [])
        acc = strategy.fold(acc, day_check_ins)

        progress = compute_progress(kr.kr_type, kr.direction, acc.value, baseline, kr.target_value)
        expected_progress = compute_expected_progress(min(end_of_day(day), window.end), period)
        pace_ratio = compute_pace_ratio(progress, expected_progress)

        series.append(DailyDataPoint(
            date=day,
            current_value=acc.value,
            progress=progress,
            expected_progress=expected_progress,
            pace_ratio=pace_ratio,
            pace_status=classify_pace_status(pace_ratio),
            check_in_count=len(day_check_ins),
        ))
        day += timedelta(days=1)

    return series


def _week_start(moment: datetime) -> datetime:
    # Tydzień od niedzieli
    return start_of_day(moment) + relativedelta(weekday=SU(-1))


def build_weekly_series(daily_series: Sequence[DailyDataPoint]) -> List[DailyDataPoint]:
    """
    Tydzień reprezentuje jego OSTATNI dzień ("gdzie skończyliśmy tydzień"), nie średnia.
    Data punktu = niedziela rozpoczynająca tydzień, check_in_count = suma z tygodnia.
    """
    weekly = []
    week_points = []
    current_week = None

    for point in daily_series:
        point_week = _week_start(point.date)
        if current_week is not None and point_week != current_week:
            weekly.append(_close_week(week_points, current_week))
            week_points = []
        current_week = point_week
        week_points.append(point)

    if week_points:
        weekly.append(_close_week(week_points, current_week))

    return weekly


def _close_week(points: List[DailyDataPoint], week_start: datetime) -> DailyDataPoint:
    last = points[-1]
    return replace(last, date=week_start, check_in_count=sum(p.check_in_count for p in points))
