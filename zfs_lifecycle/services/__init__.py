"""
State queries and lifecycle operations built on the zfs command executor.
"""

from .state_inspector import StateInspector
from .lifecycle_service import DatasetLifecycleService

__all__ = [
    "StateInspector",
    "DatasetLifecycleService",
]
