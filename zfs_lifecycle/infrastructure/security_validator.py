"""
Concrete implementation of security validator interface.
"""
import re

from ..core.interfaces.security_validator import ISecurityValidator
from ..core.value_objects.dataset_name import DatasetName
from ..core.exceptions.validation_exceptions import DatasetNameValidationError


class SecurityValidator(ISecurityValidator):
    """Rejects dataset names that could smuggle anything onto a command line."""

    def __init__(self):
        # Checked first so injection attempts get a specific reason
        self._dangerous_patterns = [
            (re.compile(r'[;&|`$(){}\[\]\\]'), "shell metacharacters"),
            (re.compile(r'[<>]'), "redirection operators"),
            (re.compile(r'[\n\r\x00]'), "control characters"),
            (re.compile(r'\.\./'), "path traversal"),
        ]

    def validate_dataset_name(self, name: str) -> DatasetName:
        """Validate dataset name for security and format compliance."""
        if not isinstance(name, str):
            raise DatasetNameValidationError(repr(name), "name must be a string")

        candidate = name.strip()
        for pattern, issue in self._dangerous_patterns:
            if pattern.search(candidate):
                raise DatasetNameValidationError(candidate, f"contains {issue}")

        return DatasetName.from_string(candidate)
