from abc import ABC, abstractmethod
from typing import Optional, Sequence
from dataclasses import dataclass


@dataclass
class CommandResult:
    """Result of a command execution"""
    returncode: int
    stdout: str
    stderr: str
    success: Optional[bool] = None
    spawn_error: Optional[str] = None

    def __post_init__(self):
        if self.success is None:
            self.success = self.spawn_error is None and self.returncode == 0

    @property
    def spawned(self) -> bool:
        """False when the process could not be started at all"""
        return self.spawn_error is None


class ICommandExecutor(ABC):
    """Interface for command execution with validation"""

    @abstractmethod
    def run(self, argv: Sequence[str], stdin_payload: Optional[str] = None) -> CommandResult:
        """Run argv without a shell, optionally feeding one line on stdin"""
        pass

    @abstractmethod
    def execute_zfs(self, command: str, *args: str,
                    stdin_payload: Optional[str] = None,
                    privileged: bool = False) -> CommandResult:
        """Execute an allow-listed zfs subcommand"""
        pass
