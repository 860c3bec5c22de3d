# apps/okrs/domain/services/current_value.py
from typing import List, Optional, Sequence

from apps.okrs.domain.entities import CheckIn, KeyResult, KrConfig, KrType, Task, TimeWindow, TrackingSource
from apps.okrs.domain.services.filters import (
    filter_check_ins_in_window,
    filter_completed_tasks_in_window,
    latest_check_in,
)


def compute_current_value(
        kr: KeyResult,
        check_ins: Sequence[CheckIn],
        tasks: Sequence[Task],
        window: TimeWindow,
        config: Optional[KrConfig] = None
    ) -> float:
    """Bieżąca wartość KR w oknie - strategia zależy od kr_type."""
    config = config or KrConfig()

    window_check_ins = filter_check_ins_in_window(check_ins, window)
    window_tasks = filter_completed_tasks_in_window(tasks, window)

    resolver = _RESOLVERS[KrType(kr.kr_type)]
    return resolver(kr, window_check_ins, window_tasks, config.tracking_source)


def _latest_value(kr: KeyResult, check_ins: List[CheckIn], tasks: List[Task], source: TrackingSource) -> float:
    # metric / rate: wygrywa najświeższy check-in
    latest = latest_check_in(check_ins)
    if latest is None:
        return kr.start_value
    return latest.value


def _count_value(kr: KeyResult, check_ins: List[CheckIn], tasks: List[Task], source: TrackingSource) -> float:
    if source == TrackingSource.TASKS:
        return len(tasks)

    if source == TrackingSource.MIXED:
        return sum(ci.value for ci in check_ins) + len(tasks)

    if not check_ins:
        return kr.start_value
    return sum(ci.value for ci in check_ins)


def _average_value(kr: KeyResult, check_ins: List[CheckIn], tasks: List[Task], source: TrackingSource) -> float:
    if not check_ins:
        return kr.start_value
    return sum(ci.value for ci in check_ins) / len(check_ins)


def _milestone_value(kr: KeyResult, check_ins: List[CheckIn], tasks: List[Task], source: TrackingSource) -> float:
    latest = latest_check_in(check_ins)
    if latest is not None:
        return latest.value

    if source == TrackingSource.TASKS:
        # Uwaga: liczba ukończonych zadań, nie 0/1 - patrz compute_milestone_progress_with_tasks
        return len(tasks)

    return 0


_RESOLVERS = {
    KrType.METRIC: _latest_value,
    KrType.RATE: _latest_value,
    KrType.COUNT: _count_value,
    KrType.AVERAGE: _average_value,
    KrType.MILESTONE: _milestone_value,
}
