"""Engine settings and their sources.

Settings can be built from a dictionary, a YAML or JSON file, or environment
variables, and installed as the process-wide defaults. Validators read the
current settings once, when they are constructed.

Environment variable format:
    DATAKNOBS_SCHEMA_<SETTING>

Examples:
    - DATAKNOBS_SCHEMA_STRICT_BOOLEANS=true
    - DATAKNOBS_SCHEMA_IGNORE_EXTRA_KEYS=1
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "DATAKNOBS_SCHEMA_"


@dataclass(frozen=True)
class SchemaSettings:
    """Defaults applied when validators are constructed.

    Attributes:
        strict_booleans: Reject unrecognised text when coercing to bool
            instead of treating it as ``False``
        ignore_extra_keys: Default extra-key policy for DictSchema
        log_failures: Log DictSchema and Or failures at DEBUG level
    """

    strict_booleans: bool = False
    ignore_extra_keys: bool = False
    log_failures: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SchemaSettings:
        """Create settings from a dictionary.

        Args:
            data: Mapping of setting names to values

        Returns:
            SchemaSettings instance

        Raises:
            ConfigurationError: If a key is unknown or a value has the wrong type
        """
        return cls().merged(**data)

    @classmethod
    def from_file(cls, path: str | Path) -> SchemaSettings:
        """Create settings from a YAML or JSON file.

        The file may hold the settings at top level or under a ``schema``
        section.
        """
        path = Path(path).resolve()
        if not path.exists():
            raise ConfigurationError(f"Settings file not found: {path}", context={"path": str(path)})

        suffix = path.suffix.lower()
        with open(path) as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported file format: {suffix}", context={"path": str(path)})

        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file must hold a mapping: {path}", context={"path": str(path)})
        if "schema" in data and isinstance(data["schema"], dict):
            data = data["schema"]
        logger.debug(f"Loaded schema settings from {path}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, environ: dict[str, str] | None = None) -> SchemaSettings:
        """Create settings from environment variables.

        Variables with the prefix whose remainder is not a known setting
        are ignored.
        """
        environ = dict(os.environ) if environ is None else environ
        known = {f.name for f in fields(cls)}
        overrides = {}
        for key, value in environ.items():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix):].lower()
            if name in known:
                overrides[name] = _parse_value(value)
        return cls.from_dict(overrides)

    def merged(self, **overrides: Any) -> SchemaSettings:
        """Return a copy with the given settings replaced."""
        known = {f.name for f in fields(self)}
        for name, value in overrides.items():
            if name not in known:
                raise ConfigurationError(
                    f"Unknown setting: {name}",
                    context={"setting": name, "available": sorted(known)},
                )
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"Setting '{name}' must be a boolean, got {type(value).__name__}",
                    context={"setting": name, "value": value},
                )
        return replace(self, **overrides)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _parse_value(value: str) -> Any:
    """Convert an environment string to a typed value."""
    lowered = value.lower()
    if lowered in ("true", "yes", "1", "on"):
        return True
    if lowered in ("false", "no", "0", "off"):
        return False
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


_current = SchemaSettings()


def get_settings() -> SchemaSettings:
    """Get the settings new validators are built with."""
    return _current


def configure(settings: SchemaSettings | None = None, **overrides: Any) -> SchemaSettings:
    """Install process-wide settings.

    Args:
        settings: Settings to install (defaults to the current ones)
        **overrides: Individual settings to replace

    Returns:
        The installed settings
    """
    global _current
    _current = (settings or _current).merged(**overrides)
    return _current


def reset_settings() -> None:
    """Restore the built-in defaults."""
    global _current
    _current = SchemaSettings()


@contextmanager
def settings_scope(settings: SchemaSettings | None = None, **overrides: Any) -> Iterator[SchemaSettings]:
    """Temporarily install settings, restoring the previous ones on exit.

    Example:
        ```python
        with settings_scope(strict_booleans=True):
            flag = Type(bool)
        ```
    """
    global _current
    previous = _current
    try:
        yield configure(settings, **overrides)
    finally:
        _current = previous
