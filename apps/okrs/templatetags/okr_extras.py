from django import template

from apps.okrs import formatting

register = template.Library()


@register.filter
def progress_percent(progress):
    if progress is None:
        return formatting.EMPTY_PLACEHOLDER
    return formatting.format_progress(progress)


@register.filter
def pace_label(status):
    return formatting.format_pace_status(status)


@register.filter
def pace_variant(status):
    # Użycie: <span class="badge bg-{{ result.pace_status|pace_variant }}">
    return formatting.get_pace_status_variant(status)


@register.filter
def kr_value(value, kr):
    """{{ result.current_value|kr_value:kr }} - jednostka i typ z KR."""
    return formatting.format_value_with_unit(value, kr.unit, kr.kr_type)


@register.filter
def kr_delta(delta, kr):
    return formatting.format_delta(delta, kr.unit, kr.direction)


@register.filter
def kr_forecast(result, kr):
    """{{ result|kr_forecast:kr }} - prognoza vs cel."""
    return formatting.format_forecast(result.forecast_value, result.target, kr.unit, kr.kr_type)
