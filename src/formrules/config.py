"""
Engine configuration loaded from environment variables.

Environment variables:
    FORMRULES_BAIL             Stop at the first failing rule per field (default: true)
    FORMRULES_LOG_LEVEL        DEBUG, INFO, WARNING, ERROR, CRITICAL (default: WARNING)
    FORMRULES_LOG_FORMAT       json or text (default: json)
    FORMRULES_METRICS_ENABLED  Record Prometheus metrics (default: true)
    FORMRULES_LOOKUP_CACHE     Wrap lookups in a CachingLookup (default: false)
"""

import os
from typing import Literal

from pydantic import BaseModel, field_validator


TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"Cannot parse {name}='{raw}' as boolean")


class EngineConfig(BaseModel):
    """
    Process-wide engine settings.

    Attributes:
        bail: Default per-field short-circuit behavior for new sessions
        log_level: Log level for formrules loggers
        log_format: "json" or "text"
        metrics_enabled: Whether sessions record Prometheus metrics
        lookup_cache: Whether sessions wrap their lookup in a CachingLookup
    """

    bail: bool = True
    log_level: str = "WARNING"
    log_format: Literal["json", "text"] = "json"
    metrics_enabled: bool = True
    lookup_cache: bool = False

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level '{v}'")
        return level

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from FORMRULES_* environment variables."""
        return cls(
            bail=_env_bool("FORMRULES_BAIL", True),
            log_level=os.getenv("FORMRULES_LOG_LEVEL") or os.getenv("LOG_LEVEL", "WARNING"),
            log_format=os.getenv("FORMRULES_LOG_FORMAT", "json"),
            metrics_enabled=_env_bool("FORMRULES_METRICS_ENABLED", True),
            lookup_cache=_env_bool("FORMRULES_LOOKUP_CACHE", False),
        )


_config: EngineConfig | None = None


def get_config() -> EngineConfig:
    """Return the process-wide config, loading it from the environment on first use."""
    global _config
    if _config is None:
        _config = EngineConfig.from_env()
    return _config


def set_config(config: EngineConfig | None) -> None:
    """Replace the process-wide config (None reloads from the environment on next use)."""
    global _config
    _config = config
