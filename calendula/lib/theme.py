"""Theme discovery and metadata for calendar views.

Themes are optional directories under the configured themes directory.
Each theme must have a templates/ subdirectory and may include a
theme.yaml with metadata. A theme can name a ``parent`` theme, in which
case templates missing from the child are looked up in the parent.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from calendula.config import get_settings

logger = logging.getLogger(__name__)


@dataclass
class ThemeInfo:
    """Metadata about a discovered theme."""

    directory_name: str
    name: str
    description: str = ""
    version: str = ""
    author: str = ""
    parent: str = ""
    templates_dir: Path = field(default_factory=Path)


def get_themes_dir() -> Path:
    """Return the configured themes directory."""
    return get_settings().get_themes_dir()


def discover_themes(themes_dir: Path | None = None) -> list[ThemeInfo]:
    """Scan the themes directory and return metadata for all valid themes."""
    themes_dir = themes_dir or get_themes_dir()
    if not themes_dir.is_dir():
        return []

    return [
        _parse_theme(entry)
        for entry in sorted(themes_dir.iterdir())
        if entry.is_dir() and (entry / "templates").is_dir()
    ]


def get_theme_info(name: str, themes_dir: Path | None = None) -> ThemeInfo | None:
    """Look up a single theme by its directory name."""
    themes_dir = themes_dir or get_themes_dir()
    theme_dir = themes_dir / name
    if not theme_dir.is_dir() or not (theme_dir / "templates").is_dir():
        return None

    return _parse_theme(theme_dir)


def get_theme_chain(name: str, themes_dir: Path | None = None) -> list[ThemeInfo]:
    """Return the theme followed by its parents, nearest first.

    Stops at the first missing theme or at a theme already in the chain.
    """
    chain: list[ThemeInfo] = []
    seen: set[str] = set()
    while name and name not in seen:
        seen.add(name)
        info = get_theme_info(name, themes_dir)
        if info is None:
            if chain:
                logger.warning("Theme %r names missing parent %r", chain[-1].directory_name, name)
            break
        chain.append(info)
        name = info.parent
    return chain


def _parse_theme(theme_dir: Path) -> ThemeInfo:
    """Parse a theme directory into a ThemeInfo."""
    directory_name = theme_dir.name
    meta: dict = {}

    metadata_file = theme_dir / "theme.yaml"
    if metadata_file.is_file():
        try:
            with open(metadata_file, "r") as f:
                meta = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            logger.warning("Could not read %s", metadata_file, exc_info=True)
        if not isinstance(meta, dict):
            meta = {}

    return ThemeInfo(
        directory_name=directory_name,
        name=str(meta.get("name", directory_name)),
        description=str(meta.get("description", "")),
        version=str(meta.get("version", "")),
        author=str(meta.get("author", "")),
        parent=str(meta.get("parent", "") or ""),
        templates_dir=theme_dir / "templates",
    )
