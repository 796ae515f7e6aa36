"""Central configuration access for accrual."""

from __future__ import annotations

from .defaults import get_config, get_default_config, init_environment
from .schemas import (
    AccrualConfig,
    CalendarDefinition,
    ConfigValidationError,
    FxIndexDefinition,
    LoggingSettings,
    discover_config_files,
    load_config,
    validate_config_files,
)

__all__ = [
    "AccrualConfig",
    "CalendarDefinition",
    "ConfigValidationError",
    "FxIndexDefinition",
    "LoggingSettings",
    "discover_config_files",
    "get_config",
    "get_default_config",
    "init_environment",
    "load_config",
    "validate_config_files",
]
