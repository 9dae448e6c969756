"""Template file lookup across an ordered set of folders.

Folders are searched from the lowest priority number to the highest:

1. themes/<active>/templates/ (active theme)
2. themes/<parent>/templates/ (parent themes, nearest first)
3. extra directories from the ``templates.directories`` setting
4. ./templates/ (working directory)
5. calendula/templates/ (bundled defaults)
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from calendula.config import Settings, get_settings
from calendula.lib.theme import get_theme_chain

logger = logging.getLogger(__name__)

PACKAGE_TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

THEME_PRIORITY = 10
PARENT_THEME_STEP = 5
EXTRA_DIR_PRIORITY = 30
USER_DIR_PRIORITY = 50
PACKAGE_PRIORITY = 100


@dataclass(frozen=True)
class LookupFolder:
    """A directory searched for templates."""

    id: str
    path: Path
    priority: int


class TemplateLocator:
    """Finds the first existing template file for a list of name fragments."""

    def __init__(self, folders: Iterable[LookupFolder], extension: str = ".html"):
        self.folders = sorted(folders, key=lambda folder: folder.priority)
        self.extension = extension

    def get_template_path_list(self) -> list[LookupFolder]:
        return list(self.folders)

    def locate(self, fragments: Sequence[str]) -> Path | None:
        """Return the first file matching ``fragments`` by folder priority, or None."""
        fragments = [f.strip("/") for f in fragments if f and f.strip("/")]
        if not fragments:
            return None

        relative = "/".join(fragments)
        # Names never climb out of their lookup folder
        if ".." in relative.split("/"):
            logger.debug("Refusing template name outside lookup folders: %r", relative)
            return None
        if not relative.endswith(self.extension):
            relative += self.extension

        for folder in self.folders:
            candidate = folder.path / relative
            if candidate.is_file():
                return candidate
        return None

    def template_name(self, path: Path) -> str:
        """Return ``path`` relative to the lookup folder it lives in."""
        for folder in self.folders:
            try:
                return path.relative_to(folder.path).as_posix()
            except ValueError:
                continue
        raise ValueError(f"{path} is not inside any lookup folder")

    def __repr__(self) -> str:
        return f"TemplateLocator({[folder.id for folder in self.folders]!r})"


def build_lookup_folders(settings: Settings | None = None, theme_name: str | None = None) -> list[LookupFolder]:
    """Compute the lookup folders for the configured (or given) theme.

    Missing directories are skipped; the bundled template directory is
    always included.
    """
    settings = settings or get_settings()
    theme_name = settings.theme if theme_name is None else theme_name

    folders: list[LookupFolder] = []

    if theme_name:
        chain = get_theme_chain(theme_name, settings.get_themes_dir())
        if not chain:
            logger.warning("Theme %r not found in %s", theme_name, settings.get_themes_dir())
        for depth, theme in enumerate(chain):
            folders.append(
                LookupFolder(
                    id=f"theme:{theme.directory_name}",
                    path=theme.templates_dir,
                    priority=THEME_PRIORITY + depth * PARENT_THEME_STEP,
                )
            )

    for offset, directory in enumerate(settings.templates.directories):
        path = Path(directory)
        if not path.is_absolute():
            path = Path.cwd() / path
        if path.is_dir():
            folders.append(LookupFolder(id=f"dir:{directory}", path=path, priority=EXTRA_DIR_PRIORITY + offset))
        else:
            logger.debug("Skipping missing template directory %s", path)

    user_dir = Path.cwd() / "templates"
    if user_dir.is_dir():
        folders.append(LookupFolder(id="user", path=user_dir, priority=USER_DIR_PRIORITY))

    folders.append(LookupFolder(id="calendula", path=PACKAGE_TEMPLATE_DIR, priority=PACKAGE_PRIORITY))
    return folders


def get_locator(settings: Settings | None = None, theme_name: str | None = None) -> TemplateLocator:
    settings = settings or get_settings()
    return TemplateLocator(
        build_lookup_folders(settings, theme_name=theme_name),
        extension=settings.templates.extension,
    )
