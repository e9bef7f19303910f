"""
zfs-lifecycle: idempotent key loading and mounting for encrypted ZFS datasets.

The module-level functions below use a shared, environment-configured
ServiceFactory. Every function returns a Result; none of them raise for
expected failures.
"""
from pathlib import Path
from typing import Dict, Optional

from .core.result import Result
from .core.entities.dataset_state import DatasetSnapshot, LifecycleOutcome
from .core.value_objects.dataset_name import DatasetName
from .factories.service_factory import ServiceFactory, get_default_service_factory

__version__ = "0.1.0"


def validate_dataset_name(name: str) -> Result[DatasetName, Exception]:
    return get_default_service_factory().create_state_inspector().validate(name)


def key_status(name: str) -> Result[Optional[bool], Exception]:
    return get_default_service_factory().create_state_inspector().key_status(name)


def mount_status(name: str) -> Result[Optional[bool], Exception]:
    return get_default_service_factory().create_state_inspector().mount_status(name)


def list_mountpoints() -> Result[Dict[str, Path], Exception]:
    return get_default_service_factory().create_state_inspector().list_mountpoints()


def list_encrypted_datasets() -> Result[Dict[str, DatasetSnapshot], Exception]:
    return get_default_service_factory().create_state_inspector().list_encrypted_datasets()


def load_key(name: str, passphrase: str) -> Result[LifecycleOutcome, Exception]:
    return get_default_service_factory().create_lifecycle_service().load_key(name, passphrase)


def unload_key(name: str) -> Result[LifecycleOutcome, Exception]:
    return get_default_service_factory().create_lifecycle_service().unload_key(name)


def mount(name: str) -> Result[LifecycleOutcome, Exception]:
    return get_default_service_factory().create_lifecycle_service().mount(name)


def unmount(name: str) -> Result[LifecycleOutcome, Exception]:
    return get_default_service_factory().create_lifecycle_service().unmount(name)


__all__ = [
    "Result",
    "DatasetName",
    "DatasetSnapshot",
    "LifecycleOutcome",
    "ServiceFactory",
    "validate_dataset_name",
    "key_status",
    "mount_status",
    "list_mountpoints",
    "list_encrypted_datasets",
    "load_key",
    "unload_key",
    "mount",
    "unmount",
]
