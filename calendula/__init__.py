"""Calendar view template lookup and rendering."""

from calendula.lib.template import Template
from calendula.views import View, get_view, register_view

__all__ = ["Template", "View", "get_view", "register_view"]
