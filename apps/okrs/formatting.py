# apps/okrs/formatting.py
import math
from typing import Optional

from apps.okrs.domain.entities import KrDirection, KrType, PaceStatus

EMPTY_PLACEHOLDER = "—"

PACE_STATUS_LABELS = {
    PaceStatus.AHEAD: "Ahead",
    PaceStatus.ON_TRACK: "On Track",
    PaceStatus.AT_RISK: "At Risk",
    PaceStatus.OFF_TRACK: "Off Track",
}

# Warianty badge'y w szablonach (Bootstrap: success/info/warning/danger)
PACE_STATUS_VARIANTS = {
    PaceStatus.AHEAD: "success",
    PaceStatus.ON_TRACK: "info",
    PaceStatus.AT_RISK: "warning",
    PaceStatus.OFF_TRACK: "danger",
}


def format_progress(progress: float) -> str:
    """0.255 -> "26%". Zaokrąglenie połówek w górę, bez obcinania powyżej 100%."""
    if not math.isfinite(progress):
        return EMPTY_PLACEHOLDER
    return f"{math.floor(progress * 100 + 0.5)}%"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:.1f}"


def format_value_with_unit(value: float, unit: Optional[str], kr_type: KrType) -> str:
    formatted = _format_number(value)
    if KrType(kr_type) == KrType.RATE:
        return f"{formatted}%"
    return f"{formatted} {unit}" if unit else formatted


def format_delta(delta: float, unit: Optional[str], direction: KrDirection) -> str:
    prefix = "+" if delta > 0 else ""
    suffix = f" {unit}" if unit else ""
    return f"{prefix}{_format_number(delta)}{suffix}"


def format_forecast(forecast: Optional[float], target: float, unit: Optional[str], kr_type: KrType) -> str:
    if forecast is None:
        return EMPTY_PLACEHOLDER

    comparison = "≥" if forecast >= target else "<"
    formatted = format_value_with_unit(forecast, unit, kr_type)
    return f"{formatted} ({comparison} {format_value_with_unit(target, unit, kr_type)})"


def format_pace_status(status: PaceStatus) -> str:
    return PACE_STATUS_LABELS[PaceStatus(status)]


def get_pace_status_variant(status: PaceStatus) -> str:
    return PACE_STATUS_VARIANTS[PaceStatus(status)]
