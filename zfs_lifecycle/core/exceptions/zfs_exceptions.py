from typing import Dict, Any, Optional


class ZFSException(Exception):
    """Base exception for all ZFS operations"""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization"""
        return {
            'error_type': self.__class__.__name__,
            'message': str(self),
            'error_code': self.error_code,
            'details': self.details
        }


class DatasetException(ZFSException):
    """Dataset-related exceptions"""
    pass


class DatasetNotFoundError(DatasetException):
    """Dataset absence confirmed by a successful query"""

    def __init__(self, dataset_name: str):
        super().__init__(
            f"Dataset '{dataset_name}' not found",
            error_code="DATASET_NOT_FOUND",
            details={"dataset_name": dataset_name}
        )
        self.dataset_name = dataset_name


class LifecyclePreconditionError(DatasetException):
    """A lifecycle operation was attempted from a state that forbids it"""
    pass


class KeyNotLoadedForMountError(LifecyclePreconditionError):
    """Mount refused because the encryption key is not loaded"""

    def __init__(self, dataset_name: str):
        super().__init__(
            f"Key must be loaded before mount for dataset '{dataset_name}'",
            error_code="KEY_NOT_LOADED_FOR_MOUNT",
            details={"dataset_name": dataset_name}
        )
        self.dataset_name = dataset_name


class UnexpectedStateError(ZFSException):
    """zfs printed a token outside the known vocabulary for a column"""

    column = "state"

    def __init__(self, token: str, line: Optional[str] = None):
        message = f"Command returned unexpected {self.column} token '{token}'"
        if line is not None:
            message += f" in line: {line}"
        super().__init__(
            message,
            error_code=f"UNEXPECTED_{self.column.upper()}_STATE",
            details={"token": token, "line": line}
        )
        self.token = token
        self.line = line


class UnexpectedKeyStateError(UnexpectedStateError):
    """Key status other than 'available', 'unavailable' (or '-' where allowed)"""

    column = "key"


class UnexpectedMountStateError(UnexpectedStateError):
    """Mounted flag other than 'yes' and 'no'"""

    column = "mount"


class ExternalCommandError(ZFSException):
    """An external zfs invocation could not be started or exited nonzero"""

    operation = "zfs command"
    error_code_prefix = "COMMAND"

    def __init__(self, dataset_name: Optional[str] = None, stderr: str = "",
                 returncode: Optional[int] = None, spawn_failed: bool = False):
        subject = self.operation
        if dataset_name:
            subject += f" for dataset '{dataset_name}'"
        if spawn_failed:
            message = f"{subject} could not be started: {stderr}"
        else:
            message = f"{subject} failed (exit code {returncode}): {stderr}"
        super().__init__(
            message[0].upper() + message[1:],
            error_code=f"{self.error_code_prefix}_{'SPAWN_FAILED' if spawn_failed else 'FAILED'}",
            details={
                "dataset_name": dataset_name,
                "stderr": stderr,
                "returncode": returncode,
                "spawn_failed": spawn_failed
            }
        )
        self.dataset_name = dataset_name
        self.stderr = stderr
        self.returncode = returncode
        self.spawn_failed = spawn_failed


class KeyStatusCheckError(ExternalCommandError):
    operation = "key status check"
    error_code_prefix = "KEY_STATUS_CHECK"


class MountStatusCheckError(ExternalCommandError):
    operation = "mount status check"
    error_code_prefix = "MOUNT_STATUS_CHECK"


class MountpointListError(ExternalCommandError):
    operation = "mountpoint listing"
    error_code_prefix = "MOUNTPOINT_LIST"


class EncryptedDatasetListError(ExternalCommandError):
    operation = "encrypted dataset listing"
    error_code_prefix = "ENCRYPTED_DATASET_LIST"


class LoadKeyError(ExternalCommandError):
    operation = "load-key"
    error_code_prefix = "LOAD_KEY"


class UnloadKeyError(ExternalCommandError):
    operation = "unload-key"
    error_code_prefix = "UNLOAD_KEY"


class MountError(ExternalCommandError):
    operation = "mount"
    error_code_prefix = "MOUNT"


class UnmountError(ExternalCommandError):
    operation = "unmount"
    error_code_prefix = "UNMOUNT"
