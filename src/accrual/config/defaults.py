"""Configuration utilities for accrual."""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping

from accrual.config.schemas import AccrualConfig
from accrual.dates.calendar import available_calendars, get_calendar, register_calendar
from accrual.index.fx_index import available_fx_indices, get_fx_index, register_fx_index

__all__ = ["get_config", "get_default_config", "init_environment"]

logger = logging.getLogger(__name__)


def get_default_config() -> AccrualConfig:
    """Return the canonical configuration: logging only, built-in registries."""
    return AccrualConfig()


def get_config(overrides: Mapping[str, Any] | None = None) -> AccrualConfig:
    """Create a configuration, optionally applying ``overrides``."""
    payload = get_default_config().model_dump()
    if overrides:
        _deep_update(payload, overrides)
    return AccrualConfig.model_validate(payload)


def init_environment(config: AccrualConfig | Mapping[str, Any] | None = None) -> AccrualConfig:
    """Configure logging and register configured calendars and FX indices.

    Calendars are registered before FX indices so that indices can refer to
    them. Re-registering an identical definition is a no-op, which makes the
    call safe to repeat with the same configuration.
    """
    if config is None:
        cfg = get_default_config()
    elif isinstance(config, AccrualConfig):
        cfg = config
    else:
        cfg = AccrualConfig.model_validate(dict(config))

    logging.basicConfig(
        level=getattr(logging, cfg.logging.level, logging.INFO),
        format=cfg.logging.format,
        datefmt=cfg.logging.datefmt,
        force=cfg.logging.force,
    )

    for definition in cfg.calendars:
        calendar = definition.to_calendar()
        if definition.name in available_calendars() and get_calendar(definition.name) == calendar:
            logger.debug("Calendar %s already registered", definition.name)
            continue
        register_calendar(calendar)

    for definition in cfg.fx_indices:
        index = definition.to_index()
        if definition.name in available_fx_indices() and get_fx_index(definition.name) == index:
            logger.debug("FX index %s already registered", definition.name)
            continue
        register_fx_index(index)

    logger.info(
        "Accrual environment initialised with %d calendar(s) and %d FX index(es)",
        len(cfg.calendars),
        len(cfg.fx_indices),
    )
    return cfg


def _deep_update(target: MutableMapping[str, Any], updates: Mapping[str, Any]) -> None:
    for key, value in updates.items():
        if isinstance(value, Mapping):
            if key not in target or not isinstance(target[key], MutableMapping):
                target[key] = {}
            _deep_update(target[key], value)
        else:
            target[key] = value
