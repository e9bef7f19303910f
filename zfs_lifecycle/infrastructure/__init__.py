"""Concrete executor, validator and logging implementations"""

from .command_executor import CommandExecutor
from .security_validator import SecurityValidator

__all__ = ['CommandExecutor', 'SecurityValidator']
