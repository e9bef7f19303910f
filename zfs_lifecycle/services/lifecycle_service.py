"""
Idempotent key and mount lifecycle operations for encrypted datasets.

Each operation validates the name, reads current state, returns early when the
target state already holds and otherwise runs exactly one privileged zfs
command. Check-then-act is not atomic: do not run two operations on the same
dataset concurrently.
"""
from typing import Callable, Optional, Union

from ..core.interfaces.command_executor import ICommandExecutor
from ..core.interfaces.logger_interface import IOperationLogger
from ..core.entities.dataset_state import LifecycleOutcome
from ..core.value_objects.dataset_name import DatasetName
from ..core.exceptions.validation_exceptions import PassphraseValidationError
from ..core.exceptions.zfs_exceptions import (
    DatasetNotFoundError,
    KeyNotLoadedForMountError,
    ExternalCommandError,
    LoadKeyError,
    UnloadKeyError,
    MountError,
    UnmountError,
)
from ..core.result import Result
from .state_inspector import StateInspector

LifecycleResult = Result[LifecycleOutcome, Exception]


class DatasetLifecycleService:
    """Loads/unloads keys and mounts/unmounts datasets, collapsing no-ops into success."""

    def __init__(self,
                 executor: ICommandExecutor,
                 inspector: StateInspector,
                 logger: IOperationLogger):
        self._executor = executor
        self._inspector = inspector
        self._logger = logger

    @property
    def inspector(self) -> StateInspector:
        return self._inspector

    def load_key(self, name: Union[str, DatasetName], passphrase: str) -> LifecycleResult:
        """Load the dataset's key, reading the passphrase from stdin.

        The zfs load-key command must be pre-authorized for non-interactive sudo.
        """
        def action(dataset: DatasetName) -> LifecycleResult:
            if not isinstance(passphrase, str) or "\n" in passphrase or "\r" in passphrase:
                return Result.failure(PassphraseValidationError("must be a single line of text"))

            loaded = self._inspector.key_status(dataset)
            if loaded.is_failure:
                return Result.failure(loaded.error)
            if loaded.value is None:
                return Result.failure(DatasetNotFoundError(str(dataset)))
            if loaded.value:
                return Result.success(LifecycleOutcome.ALREADY_SATISFIED)

            return self._apply(LoadKeyError, dataset, "load-key", stdin_payload=passphrase)

        return self._tracked("load_key", name, action)

    def unload_key(self, name: Union[str, DatasetName]) -> LifecycleResult:
        """Unload the dataset's key. zfs itself refuses while the dataset is mounted."""
        def action(dataset: DatasetName) -> LifecycleResult:
            loaded = self._inspector.key_status(dataset)
            if loaded.is_failure:
                return Result.failure(loaded.error)
            if loaded.value is None:
                return Result.failure(DatasetNotFoundError(str(dataset)))
            if not loaded.value:
                return Result.success(LifecycleOutcome.ALREADY_SATISFIED)

            return self._apply(UnloadKeyError, dataset, "unload-key")

        return self._tracked("unload_key", name, action)

    def mount(self, name: Union[str, DatasetName]) -> LifecycleResult:
        """Mount the dataset; refuses without running zfs mount if the key is not loaded."""
        def action(dataset: DatasetName) -> LifecycleResult:
            loaded = self._inspector.key_status(dataset)
            if loaded.is_failure:
                return Result.failure(loaded.error)
            if loaded.value is None:
                return Result.failure(DatasetNotFoundError(str(dataset)))
            if not loaded.value:
                return Result.failure(KeyNotLoadedForMountError(str(dataset)))

            mounted = self._inspector.mount_status(dataset)
            if mounted.is_failure:
                return Result.failure(mounted.error)
            if mounted.value is None:
                return Result.failure(DatasetNotFoundError(str(dataset)))
            if mounted.value:
                return Result.success(LifecycleOutcome.ALREADY_SATISFIED)

            return self._apply(MountError, dataset, "mount")

        return self._tracked("mount", name, action)

    def unmount(self, name: Union[str, DatasetName]) -> LifecycleResult:
        def action(dataset: DatasetName) -> LifecycleResult:
            mounted = self._inspector.mount_status(dataset)
            if mounted.is_failure:
                return Result.failure(mounted.error)
            if mounted.value is None:
                return Result.failure(DatasetNotFoundError(str(dataset)))
            if not mounted.value:
                return Result.success(LifecycleOutcome.ALREADY_SATISFIED)

            return self._apply(UnmountError, dataset, "unmount")

        return self._tracked("unmount", name, action)

    # Private helper methods

    def _tracked(self, operation_type: str, name: Union[str, DatasetName],
                 action: Callable[[DatasetName], LifecycleResult]) -> LifecycleResult:
        """Validate the name, then run the action inside an operation log bracket."""
        validated = self._inspector.validate(name)
        if validated.is_failure:
            return Result.failure(validated.error)
        dataset = validated.value

        self._logger.start_operation(operation_type, str(dataset))
        result = action(dataset)
        if result.is_success:
            self._logger.complete_operation(result.value.value)
        else:
            self._logger.fail_operation(result.error)
        return result

    def _apply(self, error_type, dataset: DatasetName, command: str,
               stdin_payload: Optional[str] = None) -> LifecycleResult:
        result = self._executor.execute_zfs(
            command, str(dataset), stdin_payload=stdin_payload, privileged=True
        )
        if not result.success:
            error: ExternalCommandError = error_type(
                dataset_name=str(dataset),
                stderr=result.stderr,
                returncode=result.returncode,
                spawn_failed=not result.spawned,
            )
            return Result.failure(error)

        self._logger.info(f"zfs {command} succeeded for {dataset}")
        return Result.success(LifecycleOutcome.APPLIED)
