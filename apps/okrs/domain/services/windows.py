# apps/okrs/domain/services/windows.py
from datetime import datetime

from apps.okrs.domain.entities import KeyResult, KrAggregation, QuarterTarget, TimeWindow
from apps.okrs.domain.services.time_utils import get_quarter_dates, get_year_dates, to_utc


def get_annual_kr_window(kr: KeyResult, year: int, as_of: datetime) -> TimeWindow:
    """Okno obserwacji KR: od 1 stycznia do min(31 grudnia, as_of)."""
    year_dates = get_year_dates(year)
    end = min(year_dates.end, to_utc(as_of))
    return TimeWindow(start=year_dates.start, end=end)


def get_quarter_target_window(
        quarter_target: QuarterTarget,
        kr: KeyResult,
        year: int,
        as_of: datetime
    ) -> TimeWindow:
    """
    Okno obserwacji celu kwartalnego.
    Cumulative: liczymy od początku roku (narastająco), reset: tylko bieżący kwartał.
    Koniec zawsze obcięty do min(koniec kwartału, as_of).
    """
    quarter_dates = get_quarter_dates(year, quarter_target.quarter)

    if kr.aggregation == KrAggregation.CUMULATIVE:
        start = get_year_dates(year).start
    else:
        start = quarter_dates.start

    end = min(quarter_dates.end, to_utc(as_of))
    return TimeWindow(start=start, end=end)


def get_annual_kr_period(year: int) -> TimeWindow:
    """Pełny okres rozliczeniowy KR (bez obcinania do as_of) - baza dla tempa i prognozy."""
    return get_year_dates(year)


def get_quarter_target_period(quarter_target: QuarterTarget, kr: KeyResult, year: int) -> TimeWindow:
    quarter_dates = get_quarter_dates(year, quarter_target.quarter)
    if kr.aggregation == KrAggregation.CUMULATIVE:
        return TimeWindow(start=get_year_dates(year).start, end=quarter_dates.end)
    return quarter_dates
