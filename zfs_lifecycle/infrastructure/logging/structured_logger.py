"""
JSON-lines logging for the inspector and lifecycle service.

Each call emits one JSON object per line with timestamp, level, logger name,
message and any extra fields passed by the caller.
"""
import json
import logging
import sys
import threading
from typing import Dict, Any, Optional
from datetime import datetime, timezone
from ...core.interfaces.logger_interface import ILogger, IOperationLogger

# Attributes every LogRecord carries; never copied into the JSON body
_RESERVED_RECORD_KEYS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {'message', 'timestamp', 'asctime', 'taskName'}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StructuredFormatter(logging.Formatter):
    """Renders a record and its extra attributes as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": getattr(record, 'timestamp', None) or _utcnow().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key not in _RESERVED_RECORD_KEYS:
                entry[key] = _jsonable(value)

        return json.dumps(entry, ensure_ascii=False, separators=(',', ':'))


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class StructuredLogger(ILogger):
    """ILogger backed by a stdlib logger with a dedicated JSON handler."""

    def __init__(self, name: str = "zfs_lifecycle", level: str = "INFO", stream=None):
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.getLevelName(level.upper()))
        self.logger.propagate = False

        # getLogger returns the same object per name; attach the handler once
        if not self.logger.handlers:
            handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.ERROR, message, extra)

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        if not self.logger.isEnabledFor(level):
            return

        record = self.logger.makeRecord(self.name, level, "", 0, message, (), None)
        record.timestamp = _utcnow().isoformat()
        for key, value in (extra or {}).items():
            if key not in _RESERVED_RECORD_KEYS:
                setattr(record, key, value)
        self.logger.handle(record)


class OperationLogger(StructuredLogger, IOperationLogger):
    """Tracks the current lifecycle operation and stamps its context on every line.

    Operation state is thread-local, one operation per thread.
    """

    def __init__(self, name: str = "zfs_lifecycle", level: str = "INFO", stream=None):
        super().__init__(name, level, stream)
        self._local = threading.local()

    @property
    def context(self) -> Dict[str, Any]:
        return getattr(self._local, "context", {})

    @property
    def started_at(self) -> Optional[datetime]:
        return getattr(self._local, "started_at", None)

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        fields = dict(self.context)
        fields.update(extra or {})
        super()._log(level, message, fields)

    def start_operation(self, operation_type: str, dataset_name: str) -> None:
        self._local.context = {"operation_type": operation_type, "dataset_name": dataset_name}
        self._local.started_at = _utcnow()
        self.info(f"Starting operation: {operation_type}")

    def complete_operation(self, outcome: str) -> None:
        self.info(f"Operation completed: {self._operation_type()}", {
            "success": True,
            "outcome": outcome,
            "duration_seconds": self._elapsed(),
        })
        self._clear()

    def fail_operation(self, error: Exception) -> None:
        if hasattr(error, 'to_dict'):
            details = error.to_dict()
        else:
            details = {"error_type": type(error).__name__, "message": str(error)}
        self.error(f"Operation failed: {self._operation_type()}", {
            "success": False,
            "error": details,
            "duration_seconds": self._elapsed(),
        })
        self._clear()

    def _operation_type(self) -> str:
        return self.context.get("operation_type", "unknown")

    def _elapsed(self) -> Optional[float]:
        if self.started_at is None:
            return None
        return (_utcnow() - self.started_at).total_seconds()

    def _clear(self) -> None:
        self._local.context = {}
        self._local.started_at = None
