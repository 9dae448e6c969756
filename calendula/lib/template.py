"""Template lookup and rendering for calendar views.

A ``Template`` is created per render pass and bound to one view. It finds
the view's template file, falling back along the view's inheritance chain
and then to ``base.html``:

- Template(MonthView()).get_template_file() → month.html, else base.html
- Template(SummaryView()).get_template_file() → summary.html → list.html → base.html
- Template(SummaryView()).get_template_file("summary/event") →
  summary/event.html → list/event.html (no base fallback for nested names)

Results, including misses, are cached for the lifetime of the instance.
"""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import jinja2
from litestar.contrib.jinja import JinjaTemplateEngine
from litestar.response import Template as TemplateResponse
from litestar.template import TemplateConfig

from calendula.config import Settings, get_settings
from calendula.lib.exceptions import TemplateNotFoundError
from calendula.lib.hooks import (
    AFTER_TEMPLATE_RENDER,
    BEFORE_TEMPLATE_RENDER,
    TEMPLATE_CONTEXT,
    TEMPLATE_HTML,
    hooks,
)
from calendula.lib.locator import PACKAGE_TEMPLATE_DIR, TemplateLocator, get_locator
from calendula.views.base import ViewIdentity

logger = logging.getLogger(__name__)

BASE_TEMPLATE = "base"
NOT_FOUND_TEMPLATE = "not-found"

TemplateName = str | Sequence[str] | None


class Template:
    def __init__(
        self,
        view: ViewIdentity,
        locator: TemplateLocator | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.locator = locator or get_locator(self.settings)
        self._values: dict[str, Any] = {}
        self._template_file_cache: dict[str, Path | None] = {}
        self._jinja_env: jinja2.Environment | None = None

        self.set_view(view)

        # Defaults every view is likely to read; views override them.
        self.set_values(
            {
                "slug": view.get_view_slug(),
                "prev_url": "",
                "next_url": "",
            },
            overwrite=False,
        )
        self._set_view_values()
        self.set("view", view, overwrite=False)

    # --- view binding ---

    def set_view(self, view: ViewIdentity) -> None:
        """Bind another view. The resolution cache is kept as-is."""
        self.view = view

    def get_view(self) -> ViewIdentity:
        return self.view

    def get_view_slug(self) -> str:
        return self.view.get_view_slug()

    # --- context bag ---

    def set(self, key: str, value: Any, overwrite: bool = True) -> None:
        if overwrite or key not in self._values:
            self._values[key] = value

    def set_values(self, values: Mapping[str, Any], overwrite: bool = True) -> None:
        for key, value in values.items():
            self.set(key, value, overwrite=overwrite)

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._values)

    # --- resolution ---

    def get_template_file(self, name: TemplateName = None) -> Path | None:
        """Return the template file for ``name``, or None if there is none.

        ``name`` may be a "/"-separated string, a sequence of fragments, or
        None for the bound view's own template. When the name starts with the
        view's slug and nothing matches, each ancestor view's slug is tried in
        its place, nearest ancestor first. Single-fragment names that still
        miss fall back to the base template.
        """
        view_slug = self.get_view_slug()
        if name is None:
            fragments = [view_slug]
        elif isinstance(name, str):
            fragments = name.split("/") if name else []
        else:
            fragments = list(name)
        cache_key = "/".join(fragments)

        if cache_key in self._template_file_cache:
            logger.debug("Template cache hit for %r", cache_key)
            return self._template_file_cache[cache_key]

        file = self.locator.locate(fragments)

        if file is None:
            found_inheritance_template = False
            if fragments and fragments[0] == view_slug:
                for ancestor in self.view.get_inheritance():
                    candidate = [ancestor.get_view_slug(), *fragments[1:]]
                    file = self.locator.locate(candidate)
                    if file is not None:
                        logger.debug("Resolved %r through ancestor view %r", cache_key, candidate[0])
                        found_inheritance_template = True
                        break

            if not found_inheritance_template and len(fragments) == 1:
                logger.debug("Falling back to the base template for %r", cache_key)
                file = self.locator.locate([BASE_TEMPLATE])

        if file is None:
            logger.debug("No template found for %r", cache_key)

        self._template_file_cache[cache_key] = file
        return file

    def get_base_template_file(self) -> Path | None:
        """Return the base template, exposing lookup diagnostics to the context."""
        self.set(
            "lookup_folders",
            [
                {"id": folder.id, "priority": folder.priority, "path": self._display_path(folder.path)}
                for folder in self.locator.get_template_path_list()
            ],
            overwrite=False,
        )
        self._set_view_values()
        return self.locator.locate([BASE_TEMPLATE])

    def get_not_found_template(self) -> Path | None:
        return self.locator.locate([NOT_FOUND_TEMPLATE])

    def get_template_name(self, path: Path) -> str:
        """Return the loader-relative name of a resolved template file."""
        return self.locator.template_name(path)

    def _view_template_name(self) -> list[str]:
        view = self.view
        slug = view.get_template_slug() if hasattr(view, "get_template_slug") else view.get_view_slug()
        path = view.get_template_path() if hasattr(view, "get_template_path") else ""
        return [path, slug] if path else [slug]

    def _set_view_values(self) -> None:
        view_class = self.view if isinstance(self.view, type) else type(self.view)
        self.set("view_slug", self.view.get_view_slug(), overwrite=False)
        self.set("view_label", self.view.get_view_label(), overwrite=False)
        self.set("view_class", f"{view_class.__module__}.{view_class.__qualname__}", overwrite=False)

    def _display_path(self, path: Path) -> str:
        package_dir = PACKAGE_TEMPLATE_DIR.parent
        if path.is_relative_to(package_dir):
            return "/" + (Path("calendula") / path.relative_to(package_dir)).as_posix()
        root = Path(self.settings.templates.root_dir) if self.settings.templates.root_dir else Path.cwd()
        if path.is_relative_to(root):
            relative = path.relative_to(root)
            return "/" + relative.as_posix() if relative.parts else "/"
        return str(path)

    # --- rendering ---

    @property
    def jinja_env(self) -> jinja2.Environment:
        if self._jinja_env is None:
            self._jinja_env = jinja2.Environment(
                loader=jinja2.FileSystemLoader([str(f.path) for f in self.locator.get_template_path_list()]),
                autoescape=jinja2.select_autoescape(),
            )
        return self._jinja_env

    def _resolve_for_render(self, context: dict[str, Any]) -> Path:
        name = self._view_template_name()
        file = self.get_template_file(name)
        if file is not None:
            return file

        logger.warning("No template for view %r, rendering the not-found template", self.get_view_slug())
        self.get_base_template_file()
        for key in ("lookup_folders", "view_slug", "view_label", "view_class"):
            context.setdefault(key, self.get(key))

        file = self.get_not_found_template()
        if file is None:
            raise TemplateNotFoundError(name, [f.path for f in self.locator.get_template_path_list()])
        return file

    async def render(self, context_overrides: Mapping[str, Any] | None = None) -> str:
        """Render the bound view's template and return the HTML.

        Raises TemplateNotFoundError when neither the view's template nor the
        not-found template exists.
        """
        context = {**self._values, **(context_overrides or {})}
        file = self._resolve_for_render(context)

        context = await hooks.apply_filters(TEMPLATE_CONTEXT, context, self)
        context["_context"] = context
        await hooks.do_action(BEFORE_TEMPLATE_RENDER, self, file, context)

        html = self.jinja_env.get_template(self.get_template_name(file)).render(**context)

        await hooks.do_action(AFTER_TEMPLATE_RENDER, self, file, html)
        return await hooks.apply_filters(TEMPLATE_HTML, html, self, file)

    def to_response(self, context_overrides: Mapping[str, Any] | None = None) -> TemplateResponse:
        """Return a Litestar template response for the bound view."""
        context = {**self._values, **(context_overrides or {})}
        file = self._resolve_for_render(context)
        return TemplateResponse(self.get_template_name(file), context=context)

    def __repr__(self) -> str:
        return f"Template({self.get_view_slug()!r})"


def get_template_config(locator: TemplateLocator | None = None) -> TemplateConfig:
    """Litestar template configuration searching the same folders as ``locator``."""
    locator = locator or get_locator()
    return TemplateConfig(
        directory=[folder.path for folder in locator.get_template_path_list()],
        engine=JinjaTemplateEngine,
    )
