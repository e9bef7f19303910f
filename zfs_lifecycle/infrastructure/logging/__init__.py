from .structured_logger import StructuredLogger, StructuredFormatter, OperationLogger

__all__ = ['StructuredLogger', 'StructuredFormatter', 'OperationLogger']
