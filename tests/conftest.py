"""Shared pytest fixtures."""

from pathlib import Path

import pytest

import calendula.config as config_mod
from calendula.config import Settings, clear_settings_cache
from calendula.lib.hooks import hooks
from calendula.lib.locator import LookupFolder, TemplateLocator


class RecordingLocator:
    """Locator fake answering from a fixed table and recording every lookup."""

    def __init__(self, found: dict[str, str] | None = None, folders=()):
        self.found = {key: Path(value) for key, value in (found or {}).items()}
        self.folders = list(folders)
        self.calls: list[str] = []

    def locate(self, fragments):
        key = "/".join(fragments)
        self.calls.append(key)
        return self.found.get(key)

    def get_template_path_list(self):
        return list(self.folders)

    def template_name(self, path):
        return path.name


@pytest.fixture
def settings(tmp_path):
    return Settings(themes_dir=str(tmp_path / "themes"))


@pytest.fixture
def recording_locator():
    return RecordingLocator


@pytest.fixture
def write_template():
    """Create a template file (and its parent directories)."""

    def _write(directory: Path, name: str, content: str | None = None) -> Path:
        path = directory / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content if content is not None else f"template: {name}")
        return path

    return _write


@pytest.fixture
def make_locator():
    """Build a TemplateLocator over directories, first one searched first."""

    def _make(*directories: Path, extension: str = ".html") -> TemplateLocator:
        folders = []
        for index, directory in enumerate(directories):
            directory.mkdir(parents=True, exist_ok=True)
            folders.append(LookupFolder(id=directory.name, path=directory, priority=(index + 1) * 10))
        return TemplateLocator(folders, extension=extension)

    return _make


@pytest.fixture
def clean_hooks():
    """Save and restore hooks state around a test."""
    original_filters = {name: list(handlers) for name, handlers in hooks._filters.items()}
    original_actions = {name: list(handlers) for name, handlers in hooks._actions.items()}
    hooks.clear()
    yield hooks
    hooks.clear()
    hooks._filters.update(original_filters)
    hooks._actions.update(original_actions)


@pytest.fixture
def clean_config():
    """Reset the config path override and settings cache around a test."""
    config_mod._config_path_override = None
    clear_settings_cache()
    yield
    config_mod._config_path_override = None
    clear_settings_cache()
