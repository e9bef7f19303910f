from typing import Dict, Any, Optional


class ValidationException(Exception):
    """Base validation exception"""

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[Any] = None):
        super().__init__(message)
        self.field = field
        self.value = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization"""
        return {
            'error_type': self.__class__.__name__,
            'message': str(self),
            'field': self.field,
            'value': self.value
        }


class DatasetNameValidationError(ValidationException):
    """Dataset name failed sanitization; it must never reach a command line."""

    def __init__(self, dataset_name: str, reason: str):
        super().__init__(f"Invalid dataset name '{dataset_name}': {reason}", 'dataset_name', dataset_name)
        self.dataset_name = dataset_name
        self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result['reason'] = self.reason
        return result


class PassphraseValidationError(ValidationException):
    """Passphrase cannot be delivered as a single stdin line"""

    def __init__(self, reason: str):
        # The passphrase itself is never stored or echoed
        super().__init__(f"Invalid passphrase: {reason}", 'passphrase', None)
        self.reason = reason
