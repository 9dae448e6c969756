"""Registry of available views, keyed by slug.

Views are registered with the @register_view decorator:

    @register_view
    class AgendaView(ListView):
        slug = "agenda"
        label = "Agenda"
"""

from collections.abc import Iterator

from calendula.lib.exceptions import ViewNotRegisteredError
from calendula.views.base import View


class ViewRegistry:
    def __init__(self) -> None:
        self._views: dict[str, type[View]] = {}

    def register(self, view: type[View]) -> type[View]:
        """Register a view class under its slug, replacing any previous one."""
        slug = view.get_view_slug()
        if not slug:
            raise ValueError(f"{view.__name__} has no slug")
        self._views[slug] = view
        return view

    def unregister(self, slug: str) -> bool:
        return self._views.pop(slug, None) is not None

    def get(self, slug: str) -> type[View]:
        try:
            return self._views[slug]
        except KeyError:
            raise ViewNotRegisteredError(slug) from None

    def slugs(self) -> list[str]:
        return sorted(self._views)

    def __contains__(self, slug: object) -> bool:
        return slug in self._views

    def __iter__(self) -> Iterator[type[View]]:
        return iter(self._views[slug] for slug in self.slugs())

    def __len__(self) -> int:
        return len(self._views)


# Global registry
views = ViewRegistry()


def register_view(view: type[View]) -> type[View]:
    """Class decorator registering a view in the global registry."""
    return views.register(view)


def get_view(slug: str) -> type[View]:
    return views.get(slug)
