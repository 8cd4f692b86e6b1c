"""
Logging infrastructure for the recommendation engine.

Provides:
- Structured messages with key=value fields
- A millisecond-precision formatter shared by console output
- One-call global configuration for command-line entry points

Library code only ever asks for a logger; handlers are installed by the
CLI through configure_global_logging().
"""

import logging
import sys
from datetime import datetime
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(filename)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S,%f"


class MillisecondsFormatter(logging.Formatter):
    """Custom formatter that includes milliseconds and aligns log levels."""

    def formatTime(self, record, datefmt=None):  # noqa: N802 - must match parent class method name
        """Override formatTime to include milliseconds."""
        ct = datetime.fromtimestamp(record.created)
        if datefmt and "%f" in datefmt:
            s = ct.strftime(datefmt.replace(",%f", ""))
            return s + f",{int(record.msecs):03d}"
        elif datefmt:
            return ct.strftime(datefmt)
        else:
            return ct.strftime("%Y-%m-%d %H:%M:%S") + f",{int(record.msecs):03d}"


def _with_fields(message: str, fields: dict) -> str:
    if not fields:
        return message
    formatted_data = " ".join(f"{k}={v}" for k, v in fields.items())
    return f"{message} [{formatted_data}]"


class StructuredLogger:
    """
    Thin wrapper over a stdlib logger that renders keyword arguments as
    trailing key=value pairs.

    Usage:
        logger = get_logger(__name__)
        logger.debug("Strategy excluded", strategy="csr", gate="csr1")
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional structured data."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(_with_fields(message, kwargs), stacklevel=2)

    def info(self, message: str, **kwargs):
        """Log info message with optional structured data."""
        self.logger.info(_with_fields(message, kwargs), stacklevel=2)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional structured data."""
        self.logger.warning(_with_fields(message, kwargs), stacklevel=2)

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs):
        """Log error message, attaching the traceback when an exception is given."""
        if exception:
            message = f"{message} | Exception: {str(exception)}"
        self.logger.error(_with_fields(message, kwargs), exc_info=exception is not None, stacklevel=2)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger for a module."""
    return StructuredLogger(name)


def configure_global_logging(log_level: str = "INFO", context: Optional[str] = None):
    """
    Configure root logging with the unified format.

    Call this early in application startup to ensure all logs are consistently formatted.

    Args:
        log_level: Logging level to apply globally (DEBUG, INFO, WARNING, ERROR)
        context: Optional label inserted after the level (e.g., "recommend")
    """
    if context:
        fmt_str = f"%(asctime)s | %(levelname)-8s | {context} | %(filename)s:%(lineno)d | %(message)s"
    else:
        fmt_str = LOG_FORMAT

    formatter = MillisecondsFormatter(fmt_str, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    # stderr keeps stdout clean for --json output
    root_handler = logging.StreamHandler(sys.stderr)
    root_handler.setLevel(getattr(logging, log_level.upper()))
    root_handler.setFormatter(formatter)
    root_logger.addHandler(root_handler)
