import os
import re
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env early so env vars are available for YAML interpolation
load_dotenv(Path.cwd() / ".env")

# Pattern to match $VAR_NAME environment variable references
ENV_VAR_PATTERN = re.compile(r"\$([A-Z_][A-Z0-9_]*)")

_config_path_override: Path | None = None


def interpolate_env_vars(value):
    """Recursively replace $VAR_NAME with os.environ values."""
    if isinstance(value, str):

        def replace(match):
            var = match.group(1)
            val = os.environ.get(var)
            if val is None:
                raise ValueError(f"Environment variable ${var} not set")
            return val

        return ENV_VAR_PATTERN.sub(replace, value)
    elif isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def set_config_path(path: Path | str | None) -> None:
    """Force a specific config file, bypassing environment-based resolution."""
    global _config_path_override
    _config_path_override = Path(path) if path is not None else None


def get_config_path() -> Path:
    """Return the config file to load.

    An explicit override wins. Otherwise ``app.<CALENDULA_ENV>.yaml`` is used
    when CALENDULA_ENV names a non-production environment, and ``app.yaml``
    in the working directory in every other case.
    """
    if _config_path_override is not None:
        return _config_path_override

    env = os.environ.get("CALENDULA_ENV", "").strip().lower()
    if env and env != "production":
        return Path.cwd() / f"app.{env}.yaml"
    return Path.cwd() / "app.yaml"


def load_app_config() -> dict:
    """Load and parse the config file with environment variable interpolation."""
    config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"{config_path.name} not found at {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    return interpolate_env_vars(config)


class TemplatesConfig(BaseModel):
    """Template lookup configuration."""

    extension: str = ".html"
    directories: list[str] = []
    # Stripped from lookup folder paths shown on diagnostic pages
    root_dir: str = ""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CALENDULA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False
    theme: str = ""
    themes_dir: str = "themes"

    templates: TemplatesConfig = TemplatesConfig()

    def get_themes_dir(self) -> Path:
        themes_dir = Path(self.themes_dir)
        if not themes_dir.is_absolute():
            themes_dir = Path.cwd() / themes_dir
        return themes_dir


@lru_cache
def get_settings() -> Settings:
    """Load settings from .env and the YAML config file."""
    base_settings = Settings()

    try:
        app_config = load_app_config()
    except FileNotFoundError:
        return base_settings

    updates = {}

    for key in ("debug", "theme", "themes_dir"):
        if key in app_config:
            updates[key] = app_config[key]

    if "templates" in app_config:
        updates["templates"] = TemplatesConfig(**(app_config["templates"] or {}))

    if updates:
        return base_settings.model_copy(update=updates)

    return base_settings


def clear_settings_cache() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    get_settings.cache_clear()
