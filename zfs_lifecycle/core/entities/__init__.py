from .dataset_state import DatasetSnapshot, LifecycleOutcome

__all__ = ['DatasetSnapshot', 'LifecycleOutcome']
