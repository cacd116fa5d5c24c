"""Runtime settings loaded from an optional YAML file.

The file ``ipmanager.yml`` in the working directory may override any of
the defaults below.  A missing file means defaults; a malformed one is
a ``ConfigError``.

Example ``ipmanager.yml``::

    database: inventory/ip_database.json
    probe_timeout: 0.5
    id_policy: next_max
    log_level: INFO
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .core.exceptions import ConfigError
from .core.liveness import DEFAULT_PROBE_TIMEOUT
from .inventory.persistence import DEFAULT_DATABASE
from .inventory.store import IdPolicy

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("ipmanager.yml")


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings.

    Attributes:
        database: Path of the JSON database file.
        probe_timeout: Liveness probe timeout in seconds.
        id_policy: Strategy for assigning ids to new records.
        log_level: Name of the root logging level.

    """

    database: Path = DEFAULT_DATABASE
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    id_policy: IdPolicy = IdPolicy.NEXT_MAX
    log_level: str = "WARNING"


def _coerce(raw: dict[str, Any]) -> Settings:
    """Convert a decoded YAML mapping into ``Settings``."""
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError("Unknown configuration keys", details={"keys": unknown})

    values: dict[str, Any] = {}
    if "database" in raw:
        if not isinstance(raw["database"], str) or not raw["database"]:
            raise ConfigError("'database' must be a non-empty path string")
        values["database"] = Path(raw["database"])
    if "probe_timeout" in raw:
        timeout = raw["probe_timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError(
                "'probe_timeout' must be a positive number",
                details={"probe_timeout": timeout},
            )
        values["probe_timeout"] = float(timeout)
    if "id_policy" in raw:
        try:
            values["id_policy"] = IdPolicy(raw["id_policy"])
        except ValueError as exc:
            raise ConfigError(
                "'id_policy' must be one of: " + ", ".join(p.value for p in IdPolicy),
                details={"id_policy": raw["id_policy"]},
            ) from exc
    if "log_level" in raw:
        level = str(raw["log_level"]).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigError("Unknown 'log_level'", details={"log_level": raw["log_level"]})
        values["log_level"] = level
    return Settings(**values)


def load_settings(path: Path = DEFAULT_CONFIG_FILE) -> Settings:
    """Load settings from a YAML file.

    Args:
        path: Location of the configuration file.

    Returns:
        The parsed ``Settings``, or defaults if the file does not exist.

    Raises:
        ConfigError: If the file cannot be read or holds invalid settings.

    """
    import yaml  # type: ignore[import-untyped]

    path = Path(path)
    if not path.exists():
        logger.debug("No configuration file at %s, using defaults", path)
        return Settings()

    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(
            f"Cannot load configuration file: {path}",
            details={"error": str(exc)},
        ) from exc

    if raw is None:
        return Settings()
    if not isinstance(raw, dict):
        raise ConfigError(
            "Configuration file must contain a mapping",
            details={"type": type(raw).__name__},
        )
    settings = _coerce(raw)
    logger.info("Loaded configuration from %s", path)
    return settings
