from .command_executor import CommandResult, ICommandExecutor
from .logger_interface import ILogger, IOperationLogger
from .security_validator import ISecurityValidator

__all__ = [
    'CommandResult',
    'ICommandExecutor',
    'ILogger',
    'IOperationLogger',
    'ISecurityValidator',
]
