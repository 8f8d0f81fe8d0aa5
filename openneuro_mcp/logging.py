"""Diagnostic logging for the OpenNeuro MCP server.

Log lines go to stderr so they never mix with MCP traffic. Structured payloads
(dicts, lists, pydantic models) are pretty-printed before they reach the
handler.
"""

import inspect
import logging
import sys
from pprint import pformat
from typing import Any

from pydantic import BaseModel

LOGGER_PREFIX = "openneuro_mcp"
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"


class PprintLogger:
    """A logger wrapper that pretty-prints structured messages."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def _format_message(self, msg: Any, pprint: bool = True) -> str:
        """Render msg for the log line.

        Strings pass through untouched. Pydantic models are dumped as indented
        JSON, other objects go through pformat unless pprint=False.
        """
        if isinstance(msg, str) or not pprint:
            return str(msg)
        if isinstance(msg, BaseModel):
            return msg.model_dump_json(indent=2)
        return pformat(msg, width=120)

    def debug(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.debug(self._format_message(msg, pprint), *args, stacklevel=2, **kwargs)

    def info(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.info(self._format_message(msg, pprint), *args, stacklevel=2, **kwargs)

    def warning(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.warning(self._format_message(msg, pprint), *args, stacklevel=2, **kwargs)

    def error(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.error(self._format_message(msg, pprint), *args, stacklevel=2, **kwargs)

    def exception(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.exception(self._format_message(msg, pprint), *args, stacklevel=2, **kwargs)

    def __getattr__(self, name: str) -> Any:
        """Delegate setLevel, handlers, name and friends to the wrapped logger."""
        return getattr(self._logger, name)


def setup_logging(level: int | str = logging.INFO, name: str | None = None) -> PprintLogger:
    """Return a PprintLogger writing to stderr.

    Without an explicit name the logger is named after the calling module,
    under the ``openneuro_mcp`` hierarchy.
    """
    if name is None:
        frame = inspect.currentframe().f_back  # type: ignore[union-attr]
        module = frame.f_globals.get("__name__", "")  # type: ignore[union-attr]
        name = module if module.startswith(LOGGER_PREFIX) else f"{LOGGER_PREFIX}.{module or 'main'}"
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return PprintLogger(logger)


def set_log_level(level: int | str) -> None:
    """Apply level to every logger created under the openneuro_mcp hierarchy."""
    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if name.startswith(LOGGER_PREFIX) and isinstance(logger, logging.Logger):
            logger.setLevel(level)
