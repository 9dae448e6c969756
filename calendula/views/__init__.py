from calendula.views.base import View, ViewIdentity
from calendula.views.calendar import DayView, ListView, MonthView, ReflectorView, SummaryView, WeekView
from calendula.views.registry import ViewRegistry, get_view, register_view, views

__all__ = [
    "View",
    "ViewIdentity",
    "ViewRegistry",
    "get_view",
    "register_view",
    "views",
    "DayView",
    "ListView",
    "MonthView",
    "ReflectorView",
    "SummaryView",
    "WeekView",
]
