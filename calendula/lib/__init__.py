from calendula.lib.hooks import hooks, action, filter, add_action, add_filter, do_action, apply_filters
from calendula.lib.locator import LookupFolder, TemplateLocator, build_lookup_folders, get_locator
from calendula.lib.template import Template, get_template_config

__all__ = [
    "Template",
    "TemplateLocator",
    "LookupFolder",
    "build_lookup_folders",
    "get_locator",
    "get_template_config",
    "hooks",
    "action",
    "filter",
    "add_action",
    "add_filter",
    "do_action",
    "apply_filters",
]
