# apps/okrs/domain/services/filters.py
import logging
from typing import Iterable, List, Optional

from apps.okrs.domain.entities import CheckIn, Task, TimeWindow
from apps.okrs.domain.services.time_utils import parse_date

logger = logging.getLogger(__name__)


def filter_check_ins_in_window(check_ins: Iterable[CheckIn], window: TimeWindow) -> List[CheckIn]:
    """Check-iny z recorded_at w [start, end] (obie granice włącznie)."""
    result = []
    for check_in in check_ins:
        recorded_at = parse_date(check_in.recorded_at)
        if recorded_at is None:
            logger.warning("Skipping check-in %s with unparsable recorded_at=%r",
                           check_in.id, check_in.recorded_at)
            continue
        if window.contains(recorded_at):
            result.append(check_in)
    return result


def filter_completed_tasks_in_window(tasks: Iterable[Task], window: TimeWindow) -> List[Task]:
    """Tylko zadania COMPLETED z completed_at w oknie."""
    result = []
    for task in tasks:
        if not task.is_completed:
            continue
        completed_at = parse_date(task.completed_at)
        if completed_at is None:
            continue
        if window.contains(completed_at):
            result.append(task)
    return result


def filter_linked_to_quarter_target(items: Iterable, quarter_target_id: Optional[str]) -> list:
    # Działa dla CheckIn i Task (oba mają quarter_target_id)
    return [item for item in items if item.quarter_target_id == quarter_target_id]


def sort_check_ins_chronologically(check_ins: Iterable[CheckIn]) -> List[CheckIn]:
    """Sortuje rosnąco po recorded_at; check-iny bez poprawnej daty są pomijane."""
    dated = [ci for ci in check_ins if parse_date(ci.recorded_at) is not None]
    return sorted(dated, key=lambda ci: parse_date(ci.recorded_at))


def latest_check_in(check_ins: Iterable[CheckIn]) -> Optional[CheckIn]:
    ordered = sort_check_ins_chronologically(check_ins)
    return ordered[-1] if ordered else None
