# apps/okrs/domain/services/forecast.py
import math
from datetime import datetime, timedelta
from typing import Optional

from apps.okrs.domain.entities import KrType, TimeWindow
from apps.okrs.domain.services.time_utils import days_between, to_utc


def compute_forecast(
        kr_type: KrType,
        baseline: float,
        current: float,
        window: TimeWindow,
        as_of: datetime
    ) -> Optional[float]:
    """
    Prognoza wartości na koniec okresu - ekstrapolacja liniowa trendu od startu okna.
    Dla kamieni milowych nie ma czego ekstrapolować (None).
    """
    if KrType(kr_type) == KrType.MILESTONE:
        return None

    elapsed = days_between(window.start, as_of)
    rate = (current - baseline) / elapsed if elapsed > 0 else 0
    remaining = max(0, days_between(as_of, window.end))

    return current + rate * remaining


def compute_milestone_forecast_date(
        current: float,
        target: float,
        window: TimeWindow,
        now: datetime
    ) -> Optional[datetime]:
    """
    Kiedy current/target osiągnie 1 przy dotychczasowym tempie (np. zadania ukończone / wszystkie).
    None, jeśli nie ma dodatniego tempa.
    """
    now = to_utc(now)
    if current >= target:
        return now

    if current <= 0:
        return None

    elapsed = max(1, days_between(window.start, now))
    rate_per_day = current / elapsed

    days_needed = math.ceil((target - current) / rate_per_day)
    return now + timedelta(days=days_needed)
