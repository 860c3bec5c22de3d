# apps/okrs/domain/services/time_utils.py
import calendar
import math
from datetime import date, datetime, time

import pytz
from dateutil import parser as date_parser

from apps.okrs.domain.entities import TimeWindow, as_utc as to_utc

SECONDS_PER_DAY = 24 * 60 * 60


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def clamp(value: float, low: float, high: float) -> float:
    """Obcina wartość do [low, high]. NaN przechodzi bez zmian, +-inf trafia na granicę."""
    if isinstance(value, float) and math.isnan(value):
        return value
    return min(high, max(low, value))


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)


def days_between(start: datetime, end: datetime) -> int:
    """Zaokrąglona liczba dni między dwoma momentami (ujemna, jeśli end < start)."""
    seconds = (to_utc(end) - to_utc(start)).total_seconds()
    return int(round(seconds / SECONDS_PER_DAY))


def get_year_dates(year: int) -> TimeWindow:
    start = datetime(year, 1, 1, tzinfo=pytz.UTC)
    end = end_of_day(datetime(year, 12, 31, tzinfo=pytz.UTC))
    return TimeWindow(start=start, end=end)


def get_quarter_dates(year: int, quarter: int) -> TimeWindow:
    if quarter not in (1, 2, 3, 4):
        raise ValueError(f"Quarter must be 1-4, got {quarter!r}")

    first_month = (quarter - 1) * 3 + 1
    last_month = first_month + 2
    # monthrange uwzględnia lata przestępne (luty 28/29)
    last_day = calendar.monthrange(year, last_month)[1]

    start = datetime(year, first_month, 1, tzinfo=pytz.UTC)
    end = end_of_day(datetime(year, last_month, last_day, tzinfo=pytz.UTC))
    return TimeWindow(start=start, end=end)


def get_current_quarter(moment: datetime) -> int:
    return (moment.month - 1) // 3 + 1


def parse_date(value):
    """
    Zamienia datetime / date / timestamp (sekundy) / string na aware datetime w UTC.
    Dla None, pustego stringa i śmieci zwraca None - nigdy nie rzuca.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return to_utc(value)

    if isinstance(value, date):
        return to_utc(datetime.combine(value, time.min))

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=pytz.UTC)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return to_utc(date_parser.parse(text))
        except (ValueError, OverflowError):
            return None

    return None
