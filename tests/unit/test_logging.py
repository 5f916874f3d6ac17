"""Tests for worldraster.utils.logging module."""

from __future__ import annotations

import json
import logging

import pytest

from worldraster.utils import logging as logging_utils
from worldraster.utils.logging import (
    clear_correlation_context,
    configure_logging,
    correlation_context,
    get_logger,
    set_correlation_context,
)


def _read_json_log_lines(capsys: pytest.CaptureFixture[str]) -> list[dict[str, object]]:
    captured = capsys.readouterr()
    lines = [line for line in captured.out.splitlines() if line.strip()]
    assert lines, "Expected at least one log line on stdout"
    return [json.loads(line) for line in lines]


def test_configure_logging_sets_root_level() -> None:
    configure_logging(level="WARNING", log_format="console")
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_default_settings_do_not_error() -> None:
    configure_logging()


def test_get_logger_returns_logger_proxy() -> None:
    configure_logging(level="DEBUG", log_format="console")
    logger = get_logger("test.module")
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")


def test_json_log_is_valid_and_contains_correlation_ids(
    capsys: pytest.CaptureFixture[str],
) -> None:
    configure_logging(level="INFO", log_format="json")
    set_correlation_context(map_id="abc12345", operation="convert")

    logger = get_logger("test.json")
    logger.info("hello", foo="bar")
    payload = _read_json_log_lines(capsys)[-1]

    assert payload["event"] == "hello"
    assert payload["foo"] == "bar"
    assert payload["map_id"] == "abc12345"
    assert payload["operation"] == "convert"
    assert payload["level"] == "info"
    assert payload["logger"] == "test.json"
    assert "timestamp" in payload


def test_explicit_map_id_wins_over_context(
    capsys: pytest.CaptureFixture[str],
) -> None:
    configure_logging(level="INFO", log_format="json")
    set_correlation_context(map_id="from-context")

    get_logger("test.json").info("hello", map_id="explicit")
    payload = _read_json_log_lines(capsys)[-1]

    assert payload["map_id"] == "explicit"


def test_json_log_omits_correlation_ids_when_unset(
    capsys: pytest.CaptureFixture[str],
) -> None:
    configure_logging(level="INFO", log_format="json")
    clear_correlation_context()

    logger = get_logger("test.json")
    logger.info("hello")
    payload = _read_json_log_lines(capsys)[-1]

    assert payload["event"] == "hello"
    assert "map_id" not in payload
    assert "operation" not in payload



def test_correlation_context_binds_for_block(
    capsys: pytest.CaptureFixture[str],
) -> None:
    configure_logging(level="INFO", log_format="json")
    logger = get_logger("test.json")

    with correlation_context(map_id="inner", operation="draw"):
        logger.info("inside")
    logger.info("after")
    inside, after = _read_json_log_lines(capsys)[-2:]

    assert (inside["map_id"], inside["operation"]) == ("inner", "draw")
    assert "map_id" not in after
    assert "operation" not in after


def test_correlation_context_restores_outer_values(
    capsys: pytest.CaptureFixture[str],
) -> None:
    configure_logging(level="INFO", log_format="json")
    set_correlation_context(map_id="outer", operation="convert")
    logger = get_logger("test.json")

    with correlation_context(map_id="first"):
        with correlation_context(map_id="second", operation="draw"):
            logger.info("nested")
        logger.info("middle")
    logger.info("outside")
    nested, middle, outside = _read_json_log_lines(capsys)[-3:]

    assert (nested["map_id"], nested["operation"]) == ("second", "draw")
    assert (middle["map_id"], middle["operation"]) == ("first", "convert")
    assert (outside["map_id"], outside["operation"]) == ("outer", "convert")


def test_correlation_context_restores_on_error() -> None:
    with pytest.raises(RuntimeError):
        with correlation_context(map_id="doomed", operation="draw"):
            raise RuntimeError("boom")

    assert logging_utils._map_id.get() is None
    assert logging_utils._operation.get() is None
