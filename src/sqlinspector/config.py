"""Persistent CLI defaults in ~/.sqlinspector/config.toml."""

from __future__ import annotations

import os
import stat
import tomllib
from pathlib import Path

from sqlglot.dialects.dialect import Dialect

_CONFIG_FILE = Path.home() / ".sqlinspector" / "config.toml"
_SECTION = "defaults"

OUTPUT_FORMATS = ("json", "text")

# key -> built-in default
DEFAULTS: dict[str, str | None] = {
    "dialect": None,
    "format": "text",
}


class ConfigError(ValueError):
    """Raised for unknown keys or invalid values."""


def _escape_toml_value(v: str) -> str:
    """Escape a string for safe inclusion in a TOML double-quoted value."""
    return v.replace("\\", "\\\\").replace('"', '\\"')


def _write_toml(values: dict[str, str]) -> None:
    lines = [f"[{_SECTION}]"]
    for k, v in values.items():
        lines.append(f'{k} = "{_escape_toml_value(str(v))}"')
    lines.append("")

    _CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
    _CONFIG_FILE.write_text("\n".join(lines))
    os.chmod(_CONFIG_FILE, stat.S_IRUSR | stat.S_IWUSR)  # 0600


def _load_file() -> dict[str, str]:
    if not _CONFIG_FILE.exists():
        return {}
    try:
        data = tomllib.loads(_CONFIG_FILE.read_text())
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid config file {_CONFIG_FILE}: {e}") from e
    section = data.get(_SECTION, {})
    return {k: str(v) for k, v in section.items() if k in DEFAULTS}


def config_path() -> Path:
    return _CONFIG_FILE


def load_config() -> dict[str, str | None]:
    """Return the effective defaults: built-ins overlaid with the config file."""
    return {**DEFAULTS, **_load_file()}


def get_setting(key: str) -> str | None:
    _check_key(key)
    return load_config()[key]


def set_setting(key: str, value: str) -> Path:
    """Persist one setting. Returns the config file path."""
    _check_key(key)
    if key == "format" and value not in OUTPUT_FORMATS:
        raise ConfigError(f"format must be one of: {', '.join(OUTPUT_FORMATS)}")
    if key == "dialect":
        try:
            Dialect.get_or_raise(value)
        except ValueError as e:
            raise ConfigError(str(e)) from e
    values = _load_file()
    values[key] = value
    _write_toml(values)
    return _CONFIG_FILE


def unset_setting(key: str) -> bool:
    """Remove one setting. Returns True if it was set."""
    _check_key(key)
    values = _load_file()
    if key not in values:
        return False
    del values[key]
    if not values:
        _CONFIG_FILE.unlink(missing_ok=True)
    else:
        _write_toml(values)
    return True


def _check_key(key: str) -> None:
    if key not in DEFAULTS:
        valid = ", ".join(DEFAULTS)
        raise ConfigError(f"unknown setting '{key}'. Valid: {valid}")
