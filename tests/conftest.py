"""
zfs-lifecycle Test Configuration and Fixtures

Tests never touch a real zfs binary. FakeZfs stands in for the command
executor: it keeps an in-memory table of datasets, answers the listing queries
the way `zfs -H` prints them, applies lifecycle commands to its table and
records every call.
"""

import pytest
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
from unittest.mock import Mock

from zfs_lifecycle.core.interfaces.command_executor import ICommandExecutor, CommandResult
from zfs_lifecycle.infrastructure.security_validator import SecurityValidator
from zfs_lifecycle.services.state_inspector import StateInspector
from zfs_lifecycle.services.lifecycle_service import DatasetLifecycleService


@dataclass
class FakeDataset:
    name: str
    keystatus: str = "unavailable"
    mounted: str = "no"
    mountpoint: str = "-"
    passphrase: Optional[str] = "correct horse battery"


@dataclass
class ZfsCall:
    command: str
    args: Tuple[str, ...]
    stdin_payload: Optional[str]
    privileged: bool


@dataclass
class FakeZfs(ICommandExecutor):
    datasets: Dict[str, FakeDataset] = field(default_factory=dict)
    calls: List[ZfsCall] = field(default_factory=list)
    # command -> canned result returned instead of touching the table
    failures: Dict[str, CommandResult] = field(default_factory=dict)

    def add_dataset(self, name: str, **kwargs) -> FakeDataset:
        dataset = FakeDataset(name=name, **kwargs)
        self.datasets[name] = dataset
        return dataset

    def calls_for(self, command: str) -> List[ZfsCall]:
        return [call for call in self.calls if call.command == command]

    def run(self, argv: Sequence[str], stdin_payload: Optional[str] = None) -> CommandResult:
        raise AssertionError(f"FakeZfs only supports execute_zfs, got raw argv {list(argv)}")

    def execute_zfs(self, command: str, *args: str,
                    stdin_payload: Optional[str] = None,
                    privileged: bool = False) -> CommandResult:
        self.calls.append(ZfsCall(command, tuple(args), stdin_payload, privileged))
        if command in self.failures:
            return self.failures[command]

        if command == "get" and args == ("keystatus", "-H", "-o", "name,value"):
            return self._table(lambda d: (d.name, d.keystatus))
        if command == "list" and args == ("-H", "-o", "name,mounted"):
            return self._table(lambda d: (d.name, d.mounted))
        if command == "list" and args == ("-H", "-o", "name,mountpoint"):
            return self._table(lambda d: (d.name, d.mountpoint))
        if command == "list" and args == ("-H", "-o", "name,mounted,keystatus"):
            return self._table(lambda d: (d.name, d.mounted, d.keystatus))

        dataset = self.datasets.get(args[0]) if len(args) == 1 else None
        if dataset is None:
            return CommandResult(returncode=1, stdout="",
                                 stderr=f"cannot open '{args[0] if args else ''}': dataset does not exist")
        if command == "load-key":
            if stdin_payload != dataset.passphrase:
                return CommandResult(returncode=255, stdout="",
                                     stderr=f"Key load error: Incorrect key provided for '{dataset.name}'.")
            dataset.keystatus = "available"
        elif command == "unload-key":
            if dataset.mounted == "yes":
                return CommandResult(returncode=255, stdout="",
                                     stderr=f"Key unload error: '{dataset.name}' is busy.")
            dataset.keystatus = "unavailable"
        elif command == "mount":
            dataset.mounted = "yes"
        elif command == "unmount":
            dataset.mounted = "no"
        else:
            raise AssertionError(f"Unexpected zfs command: {command} {args}")
        return CommandResult(returncode=0, stdout="", stderr="")

    def _table(self, row) -> CommandResult:
        lines = ["\t".join(row(d)) for d in self.datasets.values()]
        return CommandResult(returncode=0, stdout="\n".join(lines) + "\n", stderr="")


@pytest.fixture
def fake_zfs():
    """Fake zfs with one encrypted, one unencrypted dataset."""
    zfs = FakeZfs()
    zfs.add_dataset("tank", keystatus="-", mounted="yes", mountpoint="/tank")
    zfs.add_dataset("tank/secure", mountpoint="/tank/secure")
    return zfs


@pytest.fixture
def mock_logger():
    """Create mock logger."""
    logger = Mock()
    logger.info = Mock()
    logger.error = Mock()
    logger.warning = Mock()
    logger.debug = Mock()
    return logger


@pytest.fixture
def validator():
    return SecurityValidator()


@pytest.fixture
def inspector(fake_zfs, validator, mock_logger):
    return StateInspector(executor=fake_zfs, validator=validator, logger=mock_logger)


@pytest.fixture
def lifecycle_service(fake_zfs, inspector, mock_logger):
    return DatasetLifecycleService(executor=fake_zfs, inspector=inspector, logger=mock_logger)
