from __future__ import annotations

import datetime
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from accrual.config import (
    AccrualConfig,
    CalendarDefinition,
    ConfigValidationError,
    FxIndexDefinition,
    discover_config_files,
    get_config,
    get_default_config,
    init_environment,
    load_config,
    validate_config_files,
)
from accrual.dates.calendar import get_calendar
from accrual.index.fx_index import get_fx_index


def test_load_config_produces_valid_accrual_config(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
logging:
  level: debug
calendars:
  - name: XTSE
    weekend: [Saturday, Sunday]
    holidays: [2024-07-01, 2024-12-25]
fx_indices:
  - name: BOC_USD_CAD
    fixing_calendar: XTSE
    offset_days: 1
    offset_calendar: XTSE+USNY
""".strip()
    )

    config = load_config(config_path)
    assert isinstance(config, AccrualConfig)
    assert config.logging.level == "DEBUG"
    assert config.calendars[0].holidays == [datetime.date(2024, 7, 1), datetime.date(2024, 12, 25)]
    assert config.fx_indices[0].adjustment == "NoAdjust"


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("")
    assert load_config(config_path) == get_default_config()


def test_non_mapping_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "list.yaml"
    config_path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config(config_path)


def test_unknown_keys_forbidden() -> None:
    with pytest.raises(ValidationError):
        AccrualConfig.model_validate({"seed": 1})


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "BAD", "weekend": ["Caturday"]},
        {"name": "A+B"},
        {
            "name": "ALL",
            "weekend": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
        },
    ],
)
def test_calendar_definition_validation(payload) -> None:
    with pytest.raises(ValidationError):
        CalendarDefinition.model_validate(payload)


def test_fx_index_definition_validation() -> None:
    with pytest.raises(ValidationError, match="business day convention"):
        FxIndexDefinition(name="X", fixing_calendar="EUTA", offset_calendar="EUTA", adjustment="Sideways")
    with pytest.raises(ValidationError, match="result_calendar"):
        FxIndexDefinition(name="X", fixing_calendar="EUTA", offset_calendar="EUTA", result_calendar="USNY")


def test_duplicate_names_rejected() -> None:
    with pytest.raises(ValidationError, match="Duplicate calendar"):
        AccrualConfig.model_validate({"calendars": [{"name": "A"}, {"name": "A"}]})


def test_calendar_definition_merges_base() -> None:
    definition = CalendarDefinition(
        name="EUTA_EXTRA",
        holidays=[datetime.date(2024, 6, 18)],
        base=["EUTA"],
    )
    calendar = definition.to_calendar()
    assert calendar.is_holiday(datetime.date(2024, 6, 18))
    assert calendar.is_holiday(datetime.date(2024, 12, 25))
    assert calendar.weekend_days == frozenset({5, 6})


def test_get_config_overrides() -> None:
    config = get_config({"logging": {"level": "warning", "force": False}})
    assert config.logging.level == "WARNING"
    assert config.logging.force is False
    assert config.logging.format == get_default_config().logging.format


def test_init_environment_registers_definitions() -> None:
    config = get_config(
        {
            "logging": {"level": "INFO"},
            "calendars": [{"name": "TEST_INIT_CAL", "holidays": ["2024-01-02"], "base": ["USNY"]}],
            "fx_indices": [
                {
                    "name": "TEST_INIT_FX",
                    "fixing_calendar": "TEST_INIT_CAL",
                    "offset_days": 2,
                    "offset_calendar": "TEST_INIT_CAL",
                    "adjustment": "Following",
                    "result_calendar": "USNY",
                }
            ],
        }
    )

    result = init_environment(config)
    assert result is config
    assert logging.getLogger().level == logging.INFO
    calendar = get_calendar("TEST_INIT_CAL")
    assert calendar.is_holiday(datetime.date(2024, 1, 2))
    assert calendar.is_holiday(datetime.date(2024, 7, 4))
    index = get_fx_index("TEST_INIT_FX")
    assert index.fixing_calendar is calendar
    assert index.maturity_date_offset.result_calendar is get_calendar("USNY")

    # repeating the same configuration is a no-op
    init_environment(config)
    assert get_calendar("TEST_INIT_CAL") is calendar


def test_init_environment_accepts_mapping() -> None:
    config = init_environment({"logging": {"level": "ERROR"}})
    assert isinstance(config, AccrualConfig)
    assert logging.getLogger().level == logging.ERROR
    init_environment()


def test_discover_config_files(tmp_path: Path) -> None:
    nested = tmp_path / "nested"
    nested.mkdir()
    (tmp_path / "a.yaml").write_text("{}")
    (nested / "b.yml").write_text("{}")
    (tmp_path / "notes.txt").write_text("ignored")

    files = discover_config_files([tmp_path, tmp_path / "a.yaml"])
    assert sorted(path.name for path in files) == ["a.yaml", "b.yml"]


def test_validate_config_files_detects_invalid(tmp_path: Path) -> None:
    good = tmp_path / "good.yaml"
    bad = tmp_path / "bad.yaml"
    good.write_text(
        """
logging:
  level: INFO
""".strip()
    )
    bad.write_text(
        """
logging:
  level: LOUD
calendars:
  - name: BAD
    weekend: [Funday]
""".strip()
    )

    with pytest.raises(ConfigValidationError) as exc:
        validate_config_files([tmp_path])

    assert "bad.yaml" in str(exc.value)
    assert len(exc.value.errors) == 1


def test_validate_config_files_returns_configs(tmp_path: Path) -> None:
    (tmp_path / "one.yaml").write_text("logging:\n  level: INFO\n")
    configs = validate_config_files([tmp_path])
    assert len(configs) == 1
