from abc import ABC, abstractmethod

from ..value_objects.dataset_name import DatasetName


class ISecurityValidator(ABC):
    """Interface for sanitizing untrusted input before it reaches a command line"""

    @abstractmethod
    def validate_dataset_name(self, name: str) -> DatasetName:
        """Validate and sanitize dataset name"""
        pass
