"""Verbose trace logging, enabled by the SWAGGER_DEBUG environment variable."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

_enabled = os.environ.get("SWAGGER_DEBUG", "") != ""


class _StdoutHandler(logging.Handler):
    """Writes to whatever sys.stdout is at the time of the call."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            sys.stdout.write(self.format(record) + "\n")
            sys.stdout.flush()
        except Exception:
            self.handleError(record)


_logger = logging.getLogger("specvalidate.debug")
if not _logger.handlers:
    _handler = _StdoutHandler()
    _handler.setFormatter(
        logging.Formatter("validate:%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")
    )
    _logger.addHandler(_handler)
    _logger.setLevel(logging.DEBUG)
    _logger.propagate = False


def set_debug(enabled: bool) -> None:
    """Turn trace logging on or off."""
    global _enabled
    _enabled = bool(enabled)


def debug_log(msg: str, *args: Any) -> None:
    """Log a %-formatted message with the caller's file and line, when enabled."""
    if not _enabled:
        return
    caller = sys._getframe(1)
    text = msg % args if args else msg
    location = f"{os.path.basename(caller.f_code.co_filename)}:{caller.f_lineno}"
    _logger.debug("%s: %s", location, text)