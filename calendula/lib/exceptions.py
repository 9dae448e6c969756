from collections.abc import Sequence
from pathlib import Path


class TemplateNotFoundError(LookupError):
    """Raised when rendering finds neither the view template nor the not-found template."""

    def __init__(self, fragments: Sequence[str], folders: Sequence[Path] = ()):
        self.fragments = tuple(fragments)
        self.folders = tuple(folders)
        searched = ", ".join(str(f) for f in self.folders) or "no lookup folders"
        super().__init__(f"Template {'/'.join(self.fragments)!r} not found in {searched}")


class ViewNotRegisteredError(KeyError):
    """Raised when looking up a view slug nobody registered."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(slug)

    def __str__(self) -> str:
        return f"No view registered with slug {self.slug!r}"
