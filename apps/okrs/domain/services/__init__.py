# apps/okrs/domain/services/__init__.py
# Czyste funkcje silnika postępu. ProgressService (engine.py) zależy od Django - importuj go bezpośrednio.
from apps.okrs.domain.services.aggregates import (
    compute_all_quarters_progress,
    compute_kr_progress,
    compute_objective_progress,
    compute_plan_progress,
    compute_quarter_progress,
    compute_quarter_target_progress,
    get_quarter_progress_summary,
)
from apps.okrs.domain.services.current_value import compute_current_value
from apps.okrs.domain.services.filters import filter_check_ins_in_window, filter_completed_tasks_in_window
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
from apps.okrs.domain.services.series import build_daily_series, build_weekly_series
from apps.okrs.domain.services.time_utils import (
    clamp,
    clamp01,
    days_between,
    get_current_quarter,
    get_quarter_dates,
    get_year_dates,
    parse_date,
    start_of_day,
)
from apps.okrs.domain.services.windows import get_annual_kr_window, get_quarter_target_window
