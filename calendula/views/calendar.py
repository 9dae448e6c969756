"""Views bundled with calendula."""

from calendula.views.base import View
from calendula.views.registry import register_view


@register_view
class ListView(View):
    slug = "list"
    label = "List"


@register_view
class SummaryView(ListView):
    # No template of its own; renders with list.html
    slug = "summary"
    label = "Summary"


@register_view
class MonthView(View):
    slug = "month"
    label = "Month"


@register_view
class DayView(View):
    slug = "day"
    label = "Day"


@register_view
class WeekView(DayView):
    slug = "week"
    label = "Week"


@register_view
class ReflectorView(View):
    """Falls through to base.html; useful for debugging lookup folders."""

    slug = "reflector"
    label = "Reflector"
