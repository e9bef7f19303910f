"""Domain exceptions carried inside failed Results"""

from .validation_exceptions import (
    ValidationException,
    DatasetNameValidationError,
    PassphraseValidationError,
)
from .zfs_exceptions import (
    ZFSException,
    DatasetException,
    DatasetNotFoundError,
    LifecyclePreconditionError,
    KeyNotLoadedForMountError,
    UnexpectedStateError,
    UnexpectedKeyStateError,
    UnexpectedMountStateError,
    ExternalCommandError,
    KeyStatusCheckError,
    MountStatusCheckError,
    MountpointListError,
    EncryptedDatasetListError,
    LoadKeyError,
    UnloadKeyError,
    MountError,
    UnmountError,
)

__all__ = [
    'ValidationException',
    'DatasetNameValidationError',
    'PassphraseValidationError',
    'ZFSException',
    'DatasetException',
    'DatasetNotFoundError',
    'LifecyclePreconditionError',
    'KeyNotLoadedForMountError',
    'UnexpectedStateError',
    'UnexpectedKeyStateError',
    'UnexpectedMountStateError',
    'ExternalCommandError',
    'KeyStatusCheckError',
    'MountStatusCheckError',
    'MountpointListError',
    'EncryptedDatasetListError',
    'LoadKeyError',
    'UnloadKeyError',
    'MountError',
    'UnmountError',
]
