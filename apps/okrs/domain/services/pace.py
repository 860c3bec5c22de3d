# apps/okrs/domain/services/pace.py
from datetime import datetime

from apps.okrs.domain.entities import KrDirection, PaceStatus, TimeWindow
from apps.okrs.domain.services.time_utils import clamp01, days_between

# Poniżej ~1% okna jest za wcześnie na ocenę tempa
EARLY_PERIOD_THRESHOLD = 0.01
EARLY_PROGRESS_RATIO = 1.5

AHEAD_THRESHOLD = 1.10
ON_TRACK_THRESHOLD = 0.90
AT_RISK_THRESHOLD = 0.75


def compute_expected_progress(as_of: datetime, window: TimeWindow) -> float:
    """Liniowo: jaka część okna upłynęła do as_of."""
    total_days = days_between(window.start, window.end)
    if total_days <= 0:
        return 1.0

    elapsed_days = days_between(window.start, as_of)
    return clamp01(elapsed_days / total_days)


def compute_expected_value(
        expected_progress: float,
        baseline: float,
        target: float,
        direction: KrDirection
    ) -> float:
    if KrDirection(direction) == KrDirection.MAINTAIN:
        return target
    return baseline + (target - baseline) * expected_progress


def compute_pace_ratio(actual: float, expected: float) -> float:
    if expected < EARLY_PERIOD_THRESHOLD:
        return EARLY_PROGRESS_RATIO if actual > 0 else 1.0
    return actual / expected


def classify_pace_status(ratio: float) -> PaceStatus:
    if ratio >= AHEAD_THRESHOLD:
        return PaceStatus.AHEAD
    if ratio >= ON_TRACK_THRESHOLD:
        return PaceStatus.ON_TRACK
    if ratio >= AT_RISK_THRESHOLD:
        return PaceStatus.AT_RISK
    return PaceStatus.OFF_TRACK
