"""Persisted user settings: output verbosity and platform capabilities."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import yaml

from btintentlog.core.errors import SettingsError

SETTINGS_FILE = "settings.yaml"


@dataclass(frozen=True)
class Settings:
    verbose: bool = False
    device_type_available: bool = True


def settings_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "btintentlog" / SETTINGS_FILE


def _normalize_bool(value: Any, *, context: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise SettingsError(f"{context} must be boolean true/false")


def load_settings(path: Path | None = None) -> Settings:
    """Read settings from disk; a missing file yields the defaults."""
    path = path or settings_path()
    if not path.exists():
        return Settings()

    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SettingsError(f"Could not read settings file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return Settings()
    if not isinstance(loaded, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping at root")

    unknown = sorted(set(loaded) - {"verbose", "device_type_available"})
    if unknown:
        raise SettingsError(f"Unknown settings in {path}: {', '.join(map(str, unknown))}")

    defaults = Settings()
    return Settings(
        verbose=_normalize_bool(loaded.get("verbose", defaults.verbose), context=f"{path}: verbose"),
        device_type_available=_normalize_bool(
            loaded.get("device_type_available", defaults.device_type_available),
            context=f"{path}: device_type_available",
        ),
    )


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    path = path or settings_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(asdict(settings), sort_keys=True), encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"Could not write settings file {path}: {exc}") from exc
    return path
