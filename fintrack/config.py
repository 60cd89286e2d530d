"""Configuration file management for fintrack."""

import os
import tomllib
from pathlib import Path
from typing import Any, Literal

import tomli_w

from fintrack.domain.models import SERIES_KEYS, SeriesKey

View = Literal["month", "year", "all"]

VIEWS: tuple[View, ...] = ("month", "year", "all")

DEFAULT_LOCALE = "es"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "fintrack" / "config.toml"


def default_config() -> dict[str, Any]:
    return {
        "locale": DEFAULT_LOCALE,
        "visible_series": {view: {key: True for key in SERIES_KEYS} for view in VIEWS},
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config(), f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    A missing file yields the defaults.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return default_config()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_locale(config_path: Path | None = None) -> str:
    """Get the export locale (e.g., "es" or "en")."""
    return str(load_config(config_path).get("locale", DEFAULT_LOCALE))


def get_database_override(config_path: Path | None = None) -> Path | None:
    """Get the database path set in config, if any."""
    database = load_config(config_path).get("database")
    if not database:
        return None
    return Path(database).expanduser()


def get_visible_series(view: View, config_path: Path | None = None) -> set[SeriesKey]:
    """Get the metric keys shown in a view's insights.

    Keys missing from the config are visible.

    Args:
        view: "month", "year" or "all".
        config_path: Path to config file. If None, uses default location.

    Returns:
        Set of visible metric keys.
    """
    visibility = load_config(config_path).get("visible_series", {}).get(view, {})
    return {key for key in SERIES_KEYS if visibility.get(key, True)}


def set_series_visibility(view: View, key: SeriesKey, visible: bool, config_path: Path | None = None) -> None:
    """Show or hide one metric in a view's insights.

    Args:
        view: "month", "year" or "all".
        key: Metric key.
        visible: Whether the metric is shown.
        config_path: Path to config file. If None, uses default location.
    """
    config = load_config(config_path)
    visibility = config.setdefault("visible_series", {})
    view_visibility = visibility.setdefault(view, {k: True for k in SERIES_KEYS})
    view_visibility[key] = visible
    save_config(config, config_path)
