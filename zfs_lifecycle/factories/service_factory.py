"""
Service factory for dependency injection and service creation.
"""
import threading
from typing import Dict, Optional

from ..config import LifecycleConfig, get_config
from ..core.interfaces.command_executor import ICommandExecutor
from ..core.interfaces.security_validator import ISecurityValidator
from ..core.interfaces.logger_interface import ILogger
from ..infrastructure.command_executor import CommandExecutor
from ..infrastructure.security_validator import SecurityValidator
from ..infrastructure.logging.structured_logger import StructuredLogger, OperationLogger
from ..services.state_inspector import StateInspector
from ..services.lifecycle_service import DatasetLifecycleService


class ServiceFactory:
    """Builds the inspector and lifecycle service around one shared executor and validator."""

    def __init__(self, config: Optional[LifecycleConfig] = None,
                 executor: Optional[ICommandExecutor] = None):
        self._config = config or LifecycleConfig.from_env()
        self._logger_instances: Dict[str, ILogger] = {}
        self._lock = threading.Lock()

        self._executor: ICommandExecutor = executor or CommandExecutor(
            zfs_binary=self._config.executor.zfs_binary,
            privilege_prefix=self._config.executor.privilege_command,
            timeout=self._config.executor.command_timeout,
        )
        self._validator: ISecurityValidator = SecurityValidator()

    @property
    def config(self) -> LifecycleConfig:
        return self._config

    def create_state_inspector(self) -> StateInspector:
        return StateInspector(
            executor=self._executor,
            validator=self._validator,
            logger=self._get_logger("state_inspector")
        )

    def create_lifecycle_service(self) -> DatasetLifecycleService:
        # One OperationLogger per service: it holds per-operation context
        return DatasetLifecycleService(
            executor=self._executor,
            inspector=self.create_state_inspector(),
            logger=OperationLogger(
                name=f"{self._config.logging.logger_name}.lifecycle",
                level=self._config.logging.log_level
            )
        )

    def _get_logger(self, service_name: str) -> ILogger:
        """Get or create a logger instance for a service."""
        with self._lock:
            if service_name not in self._logger_instances:
                self._logger_instances[service_name] = StructuredLogger(
                    name=f"{self._config.logging.logger_name}.{service_name}",
                    level=self._config.logging.log_level
                )
            return self._logger_instances[service_name]


_default_factory: Optional[ServiceFactory] = None
_default_lock = threading.Lock()


def create_default_service_factory() -> ServiceFactory:
    """Create a service factory configured from the environment."""
    return ServiceFactory(get_config())


def get_default_service_factory() -> ServiceFactory:
    """Shared factory behind the package-level convenience functions."""
    global _default_factory
    with _default_lock:
        if _default_factory is None:
            _default_factory = create_default_service_factory()
        return _default_factory
