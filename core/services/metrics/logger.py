"""
Structured logging for synchronization events.

Every event is one line: the event name plus the keyword fields passed by
the caller, rendered as JSON (default) or as ``key=value`` pairs.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.interfaces.logger import ILogger

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {'message', 'asctime'}
_RENAMED_PREFIX = 'field_'


def _event_fields(record: logging.LogRecord) -> Dict[str, Any]:
    fields = {}
    for key, value in record.__dict__.items():
        if key in _RECORD_ATTRS:
            continue
        if key.startswith(_RENAMED_PREFIX) and key[len(_RENAMED_PREFIX):] in _RECORD_ATTRS:
            key = key[len(_RENAMED_PREFIX):]
        fields[key] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted string
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "event": record.getMessage(),
            "logger": record.name,
        }
        log_data.update(_event_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Values like dates or tuples of domain objects fall back to str()
        return json.dumps(log_data, ensure_ascii=False, default=str)


class KeyValueFormatter(logging.Formatter):
    """Human readable ``time level event key=value ...`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{self.formatTime(record)} {record.levelname:<7} {record.getMessage()}"
        pairs = " ".join(f"{key}={value}" for key, value in _event_fields(record).items())
        return f"{line} {pairs}" if pairs else line


class StructuredLogger(ILogger):
    """Structured logger wrapper with convenience methods."""

    def __init__(
        self,
        name: str = "scope_sync",
        level: int = logging.INFO,
        enable_console: bool = True,
        enable_file: bool = False,
        log_file: Optional[str] = None,
        json_format: bool = True
    ):
        """Initialize structured logger.

        Args:
            name: Logger name
            level: Logging level
            enable_console: Output to console
            enable_file: Output to file
            log_file: Path to log file
            json_format: Emit JSON lines instead of key=value text
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.handlers = []  # Clear existing handlers

        if json_format:
            formatter = StructuredFormatter()
        else:
            formatter = KeyValueFormatter()

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self._logger.addHandler(console_handler)

        if enable_file and log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            self._logger.addHandler(file_handler)

    @property
    def logger(self) -> logging.Logger:
        """Underlying standard library logger."""
        return self._logger

    def _extra(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return {
            (f"{_RENAMED_PREFIX}{key}" if key in _RECORD_ATTRS else key): value
            for key, value in fields.items()
        }

    def debug(self, event: str, **kwargs: Any) -> None:
        """Log debug level message."""
        self._logger.debug(event, extra=self._extra(kwargs))

    def info(self, event: str, **kwargs: Any) -> None:
        """Log info level message.

        Args:
            event: Event name/message
            **kwargs: Additional structured fields
        """
        self._logger.info(event, extra=self._extra(kwargs))

    def warning(self, event: str, **kwargs: Any) -> None:
        """Log warning level message."""
        self._logger.warning(event, extra=self._extra(kwargs))

    def error(self, event: str, **kwargs: Any) -> None:
        """Log error level message.

        Args:
            event: Event name/message
            **kwargs: Additional structured fields
        """
        self._logger.error(event, extra=self._extra(kwargs))

