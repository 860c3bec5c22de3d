# apps/okrs/domain/services/progress.py
from typing import Optional

from apps.okrs.domain.entities import KeyResult, KrConfig, KrDirection, KrType
from apps.okrs.domain.services.time_utils import clamp01

# Domyślna tolerancja dla "maintain": 5% celu, ale nie mniej niż 0.5
MAINTAIN_TOLERANCE_RATIO = 0.05
MAINTAIN_MIN_TOLERANCE = 0.5

# Postęp z samych zadań nigdy nie zamyka kamienia milowego
MILESTONE_TASK_PROGRESS_CAP = 0.95


def compute_baseline(kr: KeyResult) -> float:
    """Punkt odniesienia. Dla "maintain" z zerowym startem bierzemy sam cel."""
    if kr.direction == KrDirection.MAINTAIN and kr.start_value == 0:
        return kr.target_value
    return kr.start_value


def compute_progress(
        kr_type: KrType,
        direction: KrDirection,
        current: float,
        baseline: float,
        target: float,
        config: Optional[KrConfig] = None
    ) -> float:
    """Znormalizowany postęp 0.0 - 1.0 zależny od typu i kierunku KR."""
    kr_type = KrType(kr_type)
    direction = KrDirection(direction)

    if kr_type == KrType.MILESTONE:
        return 1.0 if current >= 1 else 0.0

    if direction == KrDirection.INCREASE:
        return _increase_progress(current, baseline, target)
    if direction == KrDirection.DECREASE:
        return _decrease_progress(current, baseline, target)

    tolerance_band = config.tolerance_band if config else None
    return _maintain_progress(current, target, tolerance_band)


def _increase_progress(current: float, baseline: float, target: float) -> float:
    value_range = target - baseline
    if value_range == 0:
        return 1.0 if current >= target else 0.0
    return clamp01((current - baseline) / value_range)


def _decrease_progress(current: float, baseline: float, target: float) -> float:
    value_range = baseline - target
    if value_range == 0:
        return 1.0 if current <= target else 0.0
    return clamp01((baseline - current) / value_range)


def _maintain_progress(current: float, target: float, tolerance_band: Optional[float]) -> float:
    if tolerance_band is None:
        tolerance_band = max(abs(target) * MAINTAIN_TOLERANCE_RATIO, MAINTAIN_MIN_TOLERANCE)
    deviation = abs(current - target)
    return clamp01(1 - deviation / tolerance_band)


def compute_milestone_progress_with_tasks(
        current: float,
        completed_tasks: int,
        total_tasks: int,
        is_explicitly_complete: bool
    ) -> float:
    """
    Postęp kamienia milowego śledzonego zadaniami.

    Dla trackingu "tasks" current to LICZBA ukończonych zadań, więc już jedno
    ukończone zadanie daje current >= 1 i kamień jest zamknięty (ratio jest pomijane).
    Zachowane celowo dla zgodności - do przeglądu produktowego.
    """
    if is_explicitly_complete or current >= 1:
        return 1.0

    if total_tasks > 0:
        return min(MILESTONE_TASK_PROGRESS_CAP, completed_tasks / total_tasks)

    if 0 < current < 1:
        return current

    return 0.0


def compute_delta(current: float, target: float, direction: KrDirection) -> float:
    """Dodatni = przed celem, ujemny = za celem."""
    if KrDirection(direction) == KrDirection.DECREASE:
        return target - current
    return current - target
