# apps/okrs/domain/services/engine.py
import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from django.conf import settings
from django.utils import timezone

from apps.okrs.domain.entities import (
    CheckIn,
    DailyDataPoint,
    KeyResult,
    KrConfig,
    ProgressResult,
    QuarterProgress,
    QuarterProgressSummary,
    QuarterTarget,
    Task,
    TrackingSource,
)
from apps.okrs.domain.services import aggregates, series
from apps.okrs.domain.services.time_utils import to_utc
from apps.okrs.domain.services.windows import get_annual_kr_period, get_annual_kr_window

logger = logging.getLogger(__name__)


class ProgressService:
    """
    Granica wywołań silnika postępu: tu (i tylko tu) podstawiamy "teraz",
    jeśli widok nie poda as_of, oraz domyślny KrConfig z ustawień.
    Funkcje w aggregates/series zawsze dostają as_of jawnie.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None, default_tracking_source=None):
        self.clock = clock or timezone.now

        if default_tracking_source is None:
            okr_settings = getattr(settings, 'OKR_PROGRESS', {})
            default_tracking_source = okr_settings.get('DEFAULT_TRACKING_SOURCE', TrackingSource.CHECK_INS)
        self.default_config = KrConfig(tracking_source=default_tracking_source)

    def resolve_as_of(self, as_of: Optional[datetime] = None) -> datetime:
        return to_utc(as_of if as_of is not None else self.clock())

    def kr_progress(
            self,
            kr: KeyResult,
            check_ins: Sequence[CheckIn],
            tasks: Sequence[Task],
            year: int,
            as_of: Optional[datetime] = None,
            config: Optional[KrConfig] = None
        ) -> ProgressResult:
        as_of = self.resolve_as_of(as_of)
        logger.debug("Computing progress for KR %s (year=%s, as_of=%s)", kr.id, year, as_of.isoformat())
        return aggregates.compute_kr_progress(kr, check_ins, tasks, year, as_of, config or self.default_config)

    def quarter_target_progress(
            self,
            quarter_target: QuarterTarget,
            kr: KeyResult,
            check_ins: Sequence[CheckIn],
            tasks: Sequence[Task],
            year: int,
            as_of: Optional[datetime] = None,
            config: Optional[KrConfig] = None
        ) -> ProgressResult:
        as_of = self.resolve_as_of(as_of)
        return aggregates.compute_quarter_target_progress(
            quarter_target, kr, check_ins, tasks, year, as_of, config or self.default_config
        )

    def all_quarters_progress(
            self,
            quarter_targets: Sequence[QuarterTarget],
            kr: KeyResult,
            check_ins: Sequence[CheckIn],
            year: int,
            as_of: Optional[datetime] = None
        ) -> List[QuarterProgress]:
        return aggregates.compute_all_quarters_progress(
            quarter_targets, kr, check_ins, year, self.resolve_as_of(as_of)
        )

    def quarter_summary(
            self,
            quarter_targets: Sequence[QuarterTarget],
            kr: KeyResult,
            check_ins: Sequence[CheckIn],
            year: int,
            as_of: Optional[datetime] = None
        ) -> QuarterProgressSummary:
        return aggregates.get_quarter_progress_summary(
            quarter_targets, kr, check_ins, year, self.resolve_as_of(as_of)
        )

    def daily_series(
            self,
            kr: KeyResult,
            check_ins: Sequence[CheckIn],
            year: int,
            as_of: Optional[datetime] = None
        ) -> List[DailyDataPoint]:
        """Seria dzienna od 1 stycznia do as_of (lub końca roku), tempo względem całego roku."""
        window = get_annual_kr_window(kr, year, self.resolve_as_of(as_of))
        return series.build_daily_series(kr, check_ins, window, period=get_annual_kr_period(year))

    def weekly_series(
            self,
            kr: KeyResult,
            check_ins: Sequence[CheckIn],
            year: int,
            as_of: Optional[datetime] = None
        ) -> List[DailyDataPoint]:
        return series.build_weekly_series(self.daily_series(kr, check_ins, year, as_of))
