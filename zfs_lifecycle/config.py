"""
zfs-lifecycle Configuration Module

Loads executor and logging settings from environment variables. Every key is
looked up bare first and then with the ZFS_LIFECYCLE_ prefix.
"""

import logging
import os
import shlex
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class ExecutorConfig:
    """How the external zfs tool is invoked"""
    zfs_binary: str = "zfs"
    # Prepended to load-key/unload-key/mount/unmount; empty runs them unelevated
    privilege_command: List[str] = field(default_factory=lambda: ["sudo", "-n"])
    # Seconds; None blocks until the child exits
    command_timeout: Optional[int] = None


@dataclass
class LoggingConfig:
    log_level: str = "INFO"
    logger_name: str = "zfs_lifecycle"


class LifecycleConfig:
    """Configuration settings loaded from environment variables."""

    ENV_PREFIX = "ZFS_LIFECYCLE_"

    def __init__(self, environ: Optional[dict] = None):
        self._environ = os.environ if environ is None else environ
        self.executor = ExecutorConfig()
        self.logging = LoggingConfig()

        self._load_environment_variables()
        self._validate_configuration()

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> 'LifecycleConfig':
        return cls(environ)

    def _load_environment_variables(self):
        # ==== EXECUTOR CONFIG ====
        self.executor.zfs_binary = self._get_string("ZFS_BINARY", self.executor.zfs_binary)
        self.executor.privilege_command = self._get_argv(
            "PRIVILEGE_COMMAND", self.executor.privilege_command
        )
        self.executor.command_timeout = self._get_optional_int(
            "COMMAND_TIMEOUT", self.executor.command_timeout
        )

        # ==== LOGGING CONFIG ====
        self.logging.log_level = self._get_string("LOG_LEVEL", self.logging.log_level).upper()
        self.logging.logger_name = self._get_string("LOGGER_NAME", self.logging.logger_name)

    def _get_string(self, key: str, default: str) -> str:
        """Get string value from environment with multiple key attempts"""
        for prefix in ["", self.ENV_PREFIX]:
            value = self._environ.get(f"{prefix}{key}")
            if value is not None:
                return value
        return default

    def _get_argv(self, key: str, default: List[str]) -> List[str]:
        """Get a shell-quoted argv prefix; unparseable values keep the default"""
        value = self._get_string(key, shlex.join(default))
        try:
            return shlex.split(value)
        except ValueError as e:
            logger.warning(f"Invalid command line for {key}: {value!r} ({e}), using default: {shlex.join(default)}")
            return list(default)

    def _get_optional_int(self, key: str, default: Optional[int]) -> Optional[int]:
        """Get integer value from environment; empty string means unset"""
        value = self._get_string(key, "" if default is None else str(default)).strip()
        if not value:
            return None
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Invalid integer value for {key}: {value}, using default: {default}")
            return default

    def _validate_configuration(self):
        if self.logging.log_level not in VALID_LOG_LEVELS:
            logger.warning(f"Invalid log level: {self.logging.log_level}, using INFO")
            self.logging.log_level = "INFO"

        if self.executor.command_timeout is not None and self.executor.command_timeout <= 0:
            logger.warning(
                f"Non-positive command timeout {self.executor.command_timeout}, disabling timeout"
            )
            self.executor.command_timeout = None

        if not self.executor.zfs_binary:
            logger.warning("Empty ZFS_BINARY, using 'zfs'")
            self.executor.zfs_binary = "zfs"

    def to_dict(self) -> dict:
        return {
            "executor": {
                "zfs_binary": self.executor.zfs_binary,
                "privilege_command": list(self.executor.privilege_command),
                "command_timeout": self.executor.command_timeout,
            },
            "logging": {
                "log_level": self.logging.log_level,
                "logger_name": self.logging.logger_name,
            },
        }


_config: Optional[LifecycleConfig] = None


def get_config() -> LifecycleConfig:
    """Process-wide configuration, read from the environment on first use"""
    global _config
    if _config is None:
        _config = LifecycleConfig.from_env()
    return _config
