"""Tests for PprintLogger, setup_logging and set_log_level.

This module verifies:
- structured messages are pretty-printed, strings pass through
- pydantic models are rendered with model_dump_json()
- setup_logging names loggers under openneuro_mcp and never duplicates handlers
- set_log_level reaches every openneuro_mcp logger
"""

import logging
from io import StringIO

from pydantic import BaseModel

from openneuro_mcp.logging import LOGGER_PREFIX, PprintLogger, set_log_level, setup_logging
from openneuro_mcp.models import ErrorEnvelope


def _capture(name: str) -> tuple[PprintLogger, StringIO]:
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return PprintLogger(logger), stream


class TestPprintLogger:
    """Formatting and delegation."""

    def test_dict_is_pretty_printed(self) -> None:
        pprint_logger, stream = _capture("test_pprint_dict")
        pprint_logger.info({"message": "OpenNeuro returned GraphQL errors", "count": 2})

        output = stream.getvalue()
        assert "'count': 2" in output
        assert "{" in output

    def test_string_passes_through(self) -> None:
        pprint_logger, stream = _capture("test_pprint_str")
        pprint_logger.info("OpenNeuro API response status: 200")

        assert stream.getvalue() == "INFO - OpenNeuro API response status: 200\n"

    def test_pprint_false_uses_str(self) -> None:
        pprint_logger, stream = _capture("test_pprint_false")
        pprint_logger.warning({"key": "value"}, pprint=False)

        assert "WARNING - {'key': 'value'}" in stream.getvalue()

    def test_pydantic_model_uses_model_dump_json(self) -> None:
        pprint_logger, stream = _capture("test_pprint_model")
        pprint_logger.error(ErrorEnvelope.http_error(500, {"message": "internal"}))

        output = stream.getvalue()
        assert '"statusCode": 500' in output
        assert '"message": "OpenNeuro API HTTP Error 500"' in output

    def test_plain_model(self) -> None:
        class Probe(BaseModel):
            name: str

        pprint_logger, stream = _capture("test_pprint_probe")
        pprint_logger.debug(Probe(name="ds000224"))

        assert '"name": "ds000224"' in stream.getvalue()

    def test_exception_includes_traceback(self) -> None:
        pprint_logger, stream = _capture("test_pprint_exception")
        try:
            raise ValueError("Test exception")
        except ValueError:
            pprint_logger.exception("request failed")

        output = stream.getvalue()
        assert "request failed" in output
        assert "ValueError: Test exception" in output

    def test_delegates_to_underlying_logger(self) -> None:
        logger = logging.getLogger("test_pprint_delegate")
        pprint_logger = PprintLogger(logger)

        pprint_logger.setLevel(logging.WARNING)
        assert logger.level == logging.WARNING
        assert pprint_logger.handlers == logger.handlers


class TestSetupLogging:
    """Logger naming, handlers and levels."""

    def test_named_after_calling_module(self) -> None:
        logger = setup_logging()
        assert logger.name == f"{LOGGER_PREFIX}.{__name__}"

    def test_package_modules_keep_their_name(self) -> None:
        from openneuro_mcp import relay

        assert relay.default_logger.name == "openneuro_mcp.relay"

    def test_explicit_name_and_level(self) -> None:
        logger = setup_logging(logging.DEBUG, name="openneuro_mcp.test_explicit")
        assert logger.name == "openneuro_mcp.test_explicit"
        assert logger.level == logging.DEBUG

    def test_does_not_duplicate_handlers(self) -> None:
        first = setup_logging(name="openneuro_mcp.test_handlers")
        second = setup_logging(name="openneuro_mcp.test_handlers")
        assert first._logger is second._logger  # pylint: disable=protected-access
        assert len(second.handlers) == 1

    def test_set_log_level_applies_to_package_loggers(self) -> None:
        ours = setup_logging(name="openneuro_mcp.test_levels")
        other = logging.getLogger("unrelated.test_levels")
        other.setLevel(logging.INFO)

        set_log_level("ERROR")
        try:
            assert ours.level == logging.ERROR
            assert other.level == logging.INFO
        finally:
            set_log_level("INFO")
