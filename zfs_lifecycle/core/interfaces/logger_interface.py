"""
Logger interfaces injected into the inspector and lifecycle services.
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class ILogger(ABC):
    """Interface for structured logging operations."""

    @abstractmethod
    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        pass

    @abstractmethod
    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        pass

    @abstractmethod
    def error(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        pass


class IOperationLogger(ILogger):
    """Logger that brackets a single lifecycle operation with timing."""

    @abstractmethod
    def start_operation(self, operation_type: str, dataset_name: str) -> None:
        pass

    @abstractmethod
    def complete_operation(self, outcome: str) -> None:
        pass

    @abstractmethod
    def fail_operation(self, error: Exception) -> None:
        pass
