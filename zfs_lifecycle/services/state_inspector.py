"""
Read-only state queries against zfs.

Every query re-runs zfs; nothing is cached because the authoritative state
lives in the kernel, not in this process. Output is parsed with a small fixed
grammar: one row per line, whitespace-separated columns, rows with fewer than
the expected number of columns are ignored.
"""
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from ..core.interfaces.command_executor import ICommandExecutor, CommandResult
from ..core.interfaces.security_validator import ISecurityValidator
from ..core.interfaces.logger_interface import ILogger
from ..core.entities.dataset_state import DatasetSnapshot
from ..core.value_objects.dataset_name import DatasetName
from ..core.exceptions.validation_exceptions import ValidationException
from ..core.exceptions.zfs_exceptions import (
    ExternalCommandError,
    KeyStatusCheckError,
    MountStatusCheckError,
    MountpointListError,
    EncryptedDatasetListError,
    UnexpectedStateError,
    UnexpectedKeyStateError,
    UnexpectedMountStateError,
)
from ..core.result import Result

# keystatus reported for datasets where encryption does not apply
KEY_STATUS_NOT_APPLICABLE = "-"

KEY_STATUS_TOKENS = {
    "available": True,
    "unavailable": False,
}

MOUNTED_TOKENS = {
    "yes": True,
    "no": False,
}

KEY_STATUS_QUERY = ("get", "keystatus", "-H", "-o", "name,value")
MOUNT_STATUS_QUERY = ("list", "-H", "-o", "name,mounted")
MOUNTPOINT_QUERY = ("list", "-H", "-o", "name,mountpoint")
ENCRYPTED_LISTING_QUERY = ("list", "-H", "-o", "name,mounted,keystatus")


def parse_key_status_token(token: str, allow_not_applicable: bool = True) -> bool:
    """Map a keystatus value to "key loaded".

    The not-applicable sentinel counts as loaded for single-dataset queries:
    an unencrypted dataset never needs a key before mounting.
    """
    value = token.strip()
    if allow_not_applicable and value == KEY_STATUS_NOT_APPLICABLE:
        return True
    if value not in KEY_STATUS_TOKENS:
        raise UnexpectedKeyStateError(token)
    return KEY_STATUS_TOKENS[value]


def parse_mounted_token(token: str) -> bool:
    value = token.strip()
    if value not in MOUNTED_TOKENS:
        raise UnexpectedMountStateError(token)
    return MOUNTED_TOKENS[value]


def iter_rows(stdout: str, columns: int, keep_tail: bool = False) -> Iterator[Tuple[List[str], str]]:
    """Yield `(fields, line)` for each row with at least `columns` fields.

    Fields are truncated to `columns`; `line` is the row as zfs printed it.
    With keep_tail the last column keeps interior whitespace (mount paths).
    """
    for line in stdout.splitlines():
        if keep_tail:
            fields = line.split(None, columns - 1)
            if fields:
                fields[-1] = fields[-1].rstrip()
        else:
            fields = line.split()
        if len(fields) < columns:
            continue
        yield fields[:columns], line


def parse_rows(stdout: str, columns: int, keep_tail: bool = False) -> List[List[str]]:
    """Split tabular output into rows of exactly `columns` fields."""
    return [fields for fields, _ in iter_rows(stdout, columns, keep_tail)]


def parse_two_column_table(stdout: str) -> Dict[str, str]:
    """Name -> value mapping; a repeated name keeps its last value."""
    return {name: value for name, value in parse_rows(stdout, 2)}


class StateInspector:
    """Turns zfs listings into typed key, mount and mountpoint facts."""

    def __init__(self,
                 executor: ICommandExecutor,
                 validator: ISecurityValidator,
                 logger: ILogger):
        self._executor = executor
        self._validator = validator
        self._logger = logger

    def key_status(self, name: Union[str, DatasetName]) -> Result[Optional[bool], Exception]:
        """Whether the dataset's key is loaded.

        Success(True) for loaded or not applicable, Success(False) for not
        loaded, Success(None) when no such dataset exists.
        """
        validated = self.validate(name)
        if validated.is_failure:
            return Result.failure(validated.error)
        dataset = validated.value

        result = self._executor.execute_zfs(*KEY_STATUS_QUERY)
        if not result.success:
            return Result.failure(self._command_error(KeyStatusCheckError, result, dataset))

        table = parse_two_column_table(result.stdout)
        token = table.get(str(dataset))
        if token is None:
            self._logger.debug(f"Dataset {dataset} absent from keystatus listing")
            return Result.success(None)

        try:
            return Result.success(parse_key_status_token(token))
        except UnexpectedKeyStateError as e:
            self._logger.error(str(e), {"dataset_name": str(dataset)})
            return Result.failure(e)

    def mount_status(self, name: Union[str, DatasetName]) -> Result[Optional[bool], Exception]:
        """Whether the dataset is mounted; Success(None) when it does not exist."""
        validated = self.validate(name)
        if validated.is_failure:
            return Result.failure(validated.error)
        dataset = validated.value

        result = self._executor.execute_zfs(*MOUNT_STATUS_QUERY)
        if not result.success:
            return Result.failure(self._command_error(MountStatusCheckError, result, dataset))

        table = parse_two_column_table(result.stdout)
        token = table.get(str(dataset))
        if token is None:
            self._logger.debug(f"Dataset {dataset} absent from mounted listing")
            return Result.success(None)

        try:
            return Result.success(parse_mounted_token(token))
        except UnexpectedMountStateError as e:
            self._logger.error(str(e), {"dataset_name": str(dataset)})
            return Result.failure(e)

    def list_mountpoints(self) -> Result[Dict[str, Path], Exception]:
        """Mount path of every dataset, encrypted or not."""
        result = self._executor.execute_zfs(*MOUNTPOINT_QUERY)
        if not result.success:
            return Result.failure(self._command_error(MountpointListError, result))

        mountpoints = {
            name: Path(path)
            for name, path in parse_rows(result.stdout, 2, keep_tail=True)
        }
        self._logger.debug(f"Listed mountpoints for {len(mountpoints)} datasets")
        return Result.success(mountpoints)

    def list_encrypted_datasets(self) -> Result[Dict[str, DatasetSnapshot], Exception]:
        """Snapshot of every encrypted dataset, keyed and ordered by name.

        Rows whose keystatus is the not-applicable sentinel are unencrypted
        and skipped. Any other unknown token aborts the whole listing.
        """
        result = self._executor.execute_zfs(*ENCRYPTED_LISTING_QUERY)
        if not result.success:
            return Result.failure(self._command_error(EncryptedDatasetListError, result))

        snapshots: Dict[str, DatasetSnapshot] = {}
        for (name, mounted, keystatus), line in iter_rows(result.stdout, 3):
            if keystatus == KEY_STATUS_NOT_APPLICABLE:
                continue
            try:
                snapshots[name] = DatasetSnapshot(
                    name=name,
                    is_mounted=parse_mounted_token(mounted),
                    is_key_loaded=parse_key_status_token(keystatus, allow_not_applicable=False),
                )
            except UnexpectedStateError as e:
                error = type(e)(e.token, line=line)
                self._logger.error(str(error))
                return Result.failure(error)

        return Result.success(dict(sorted(snapshots.items())))

    def dataset_state(self, name: Union[str, DatasetName]) -> Result[Optional[DatasetSnapshot], Exception]:
        """Key and mount state of a single dataset, or Success(None) if it does not exist."""
        validated = self.validate(name)
        if validated.is_failure:
            return Result.failure(validated.error)
        dataset = validated.value

        key_loaded = self.key_status(dataset)
        if key_loaded.is_failure:
            return Result.failure(key_loaded.error)
        mounted = self.mount_status(dataset)
        if mounted.is_failure:
            return Result.failure(mounted.error)

        if key_loaded.value is None or mounted.value is None:
            return Result.success(None)
        return Result.success(DatasetSnapshot(
            name=str(dataset),
            is_mounted=mounted.value,
            is_key_loaded=key_loaded.value,
        ))

    def validate(self, name: Union[str, DatasetName]) -> Result[DatasetName, ValidationException]:
        """Validate dataset name using security validator."""
        if isinstance(name, DatasetName):
            return Result.success(name)
        try:
            return Result.success(self._validator.validate_dataset_name(name))
        except ValidationException as e:
            self._logger.warning(f"Rejected dataset name: {e}")
            return Result.failure(e)

    def _command_error(self, error_type, result: CommandResult,
                       dataset: Optional[DatasetName] = None) -> ExternalCommandError:
        error = error_type(
            dataset_name=str(dataset) if dataset else None,
            stderr=result.stderr,
            returncode=result.returncode,
            spawn_failed=not result.spawned,
        )
        self._logger.error(str(error))
        return error
