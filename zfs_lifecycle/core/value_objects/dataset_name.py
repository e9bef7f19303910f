import re
from dataclasses import dataclass
from typing import List

from ..exceptions.validation_exceptions import DatasetNameValidationError

# Sanitization exists to make command injection impossible, not to mirror the
# full ZFS naming grammar. Do not widen this set without re-auditing.
ALLOWED_SYMBOLS = frozenset('-_.:')
_SEGMENT_PATTERN = re.compile(r'[A-Za-z0-9][A-Za-z0-9_.:\-]*')


@dataclass(frozen=True)
class DatasetName:
    """Validated, immutable dataset name"""
    value: str

    def __post_init__(self):
        if not self.value:
            raise DatasetNameValidationError(self.value, "name cannot be empty")

        for segment in self.value.split('/'):
            if not segment:
                raise DatasetNameValidationError(self.value, "empty path segment")
            if segment[0] in ALLOWED_SYMBOLS:
                raise DatasetNameValidationError(
                    self.value, f"segment '{segment}' must start with a letter or digit"
                )
            if not _SEGMENT_PATTERN.fullmatch(segment):
                raise DatasetNameValidationError(
                    self.value, f"segment '{segment}' contains disallowed characters"
                )

    @classmethod
    def from_string(cls, dataset_str: str) -> 'DatasetName':
        """Trim surrounding whitespace and validate."""
        if not isinstance(dataset_str, str):
            raise DatasetNameValidationError(repr(dataset_str), "name must be a string")
        return cls(dataset_str.strip())

    def __str__(self) -> str:
        return self.value

    @property
    def segments(self) -> List[str]:
        return self.value.split('/')

    @property
    def pool(self) -> str:
        return self.segments[0]

    @property
    def is_pool_root(self) -> bool:
        return len(self.segments) == 1

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            'pool': self.pool,
            'path': self.segments[1:],
            'full_name': self.value
        }
