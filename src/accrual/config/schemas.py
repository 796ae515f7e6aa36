"""Pydantic-based configuration schemas and helpers."""
from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from accrual.dates.business_day import BusinessDayConvention
from accrual.dates.calendar import HolidayCalendar, get_calendar
from accrual.dates.days_adjustment import DaysAdjustment
from accrual.errors import NotFoundError
from accrual.index.fx_index import FxIndexDateMapper

logger = logging.getLogger(__name__)

_WEEKDAYS = {
    "MONDAY": 0,
    "TUESDAY": 1,
    "WEDNESDAY": 2,
    "THURSDAY": 3,
    "FRIDAY": 4,
    "SATURDAY": 5,
    "SUNDAY": 6,
}


class LoggingSettings(BaseModel):
    """Arguments passed to :func:`logging.basicConfig`."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field(default="INFO", description="Root logger level name")
    format: str = Field(
        default="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        description="Log record format",
    )
    datefmt: str = Field(default="%Y-%m-%d %H:%M:%S", description="Timestamp format")
    force: bool = Field(default=True, description="Replace existing root handlers")

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        canonical = value.upper()
        if not isinstance(logging.getLevelName(canonical), int):
            raise ValueError(f"Unknown logging level {value!r}")
        return canonical


class CalendarDefinition(BaseModel):
    """A holiday calendar declared in configuration."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, description="Registry name of the calendar")
    weekend: list[str] = Field(
        default_factory=lambda: ["Saturday", "Sunday"],
        description="Weekday names that are never business days",
    )
    holidays: list[datetime.date] = Field(default_factory=list, description="Listed holiday dates")
    base: list[str] = Field(
        default_factory=list,
        description="Registered calendars whose holidays are merged into this one",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if "+" in value:
            raise ValueError("Calendar names must not contain '+'")
        return value

    @field_validator("weekend")
    @classmethod
    def validate_weekend(cls, value: list[str]) -> list[str]:
        canonical = [day.strip().upper() for day in value]
        unknown = [day for day, key in zip(value, canonical) if key not in _WEEKDAYS]
        if unknown:
            raise ValueError(f"Unknown weekday names: {unknown}")
        if len(set(canonical)) == len(_WEEKDAYS):
            raise ValueError("A calendar needs at least one business day per week")
        return [day.capitalize() for day in canonical]

    def weekend_days(self) -> frozenset[int]:
        return frozenset(_WEEKDAYS[day.upper()] for day in self.weekend)

    def to_calendar(self) -> HolidayCalendar:
        """Build the calendar, merging in the holidays of any base calendars."""
        holidays = set(self.holidays)
        weekend_days = set(self.weekend_days())
        for base_name in self.base:
            base = get_calendar(base_name)
            holidays |= base.holidays
            weekend_days |= base.weekend_days
        return HolidayCalendar(
            name=self.name,
            holidays=frozenset(holidays),
            weekend_days=frozenset(weekend_days),
        )


class FxIndexDefinition(BaseModel):
    """An FX index declared in configuration."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, description="Registry name of the index")
    fixing_calendar: str = Field(description="Calendar on which the index fixes")
    offset_days: int = Field(default=2, description="Business days from fixing to maturity")
    offset_calendar: str = Field(description="Calendar used to count the offset days")
    adjustment: str = Field(default="NoAdjust", description="Business day convention after the offset")
    result_calendar: Optional[str] = Field(default=None, description="Calendar for the adjustment")

    @field_validator("adjustment")
    @classmethod
    def validate_adjustment(cls, value: str) -> str:
        try:
            BusinessDayConvention.of(value)
        except NotFoundError as error:
            raise ValueError(str(error)) from None
        return value

    @model_validator(mode="after")
    def validate_result_calendar(self) -> "FxIndexDefinition":
        if self.result_calendar is not None and self.adjustment == "NoAdjust":
            raise ValueError("result_calendar requires a business day adjustment")
        return self

    def to_index(self) -> FxIndexDateMapper:
        """Build the index, resolving calendars through the calendar registry."""
        result_calendar = get_calendar(self.result_calendar) if self.result_calendar else None
        offset = DaysAdjustment.of_business_days(
            self.offset_days,
            get_calendar(self.offset_calendar),
            BusinessDayConvention.of(self.adjustment),
            result_calendar,
        )
        return FxIndexDateMapper(
            fixing_calendar=get_calendar(self.fixing_calendar),
            maturity_date_offset=offset,
            name=self.name,
        )


class AccrualConfig(BaseModel):
    """Top-level configuration container."""

    model_config = ConfigDict(extra="forbid")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    calendars: list[CalendarDefinition] = Field(default_factory=list)
    fx_indices: list[FxIndexDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_names(self) -> "AccrualConfig":
        for label, items in (("calendar", self.calendars), ("FX index", self.fx_indices)):
            names = [item.name for item in items]
            duplicates = sorted({name for name in names if names.count(name) > 1})
            if duplicates:
                raise ValueError(f"Duplicate {label} names: {duplicates}")
        return self


class ConfigValidationError(RuntimeError):
    """Raised when one or more configuration files fail validation."""

    def __init__(self, errors: list[tuple[Path, ValidationError]]):
        message_lines = ["Configuration validation failed:"]
        for path, error in errors:
            message_lines.append(f"- {path}: {error}")
        super().__init__("\n".join(message_lines))
        self.errors = errors


def _load_yaml(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration at {path} must contain a mapping")
    return data


def load_config(path: Path | str) -> AccrualConfig:
    """Load a configuration file into an :class:`AccrualConfig`."""
    target = Path(path)
    payload = _load_yaml(target)
    logger.debug("Loaded configuration from %s", target)
    return AccrualConfig.model_validate(payload)


def discover_config_files(paths: Iterable[Path | str]) -> list[Path]:
    """Discover YAML configuration files from provided paths."""
    discovered: list[Path] = []
    seen = set()
    for raw_path in paths:
        path = Path(raw_path)
        if path.is_file() and path.suffix in {".yml", ".yaml"}:
            candidates = [path]
        elif path.is_dir():
            candidates = sorted(path.rglob("*.yml")) + sorted(path.rglob("*.yaml"))
        else:
            candidates = []
        for candidate in candidates:
            resolved = candidate.resolve()
            if resolved not in seen:
                discovered.append(resolved)
                seen.add(resolved)
    return discovered


def validate_config_files(paths: Iterable[Path | str]) -> list[AccrualConfig]:
    """Validate all configuration files under the given paths."""
    files = discover_config_files(paths)
    errors: list[tuple[Path, ValidationError]] = []
    configs: list[AccrualConfig] = []
    for file in files:
        try:
            configs.append(load_config(file))
        except ValidationError as error:
            errors.append((file, error))
    if errors:
        raise ConfigValidationError(errors)
    return configs


__all__ = [
    "AccrualConfig",
    "CalendarDefinition",
    "ConfigValidationError",
    "FxIndexDefinition",
    "LoggingSettings",
    "discover_config_files",
    "load_config",
    "validate_config_files",
]
