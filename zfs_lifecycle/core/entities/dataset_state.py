from enum import Enum
from pydantic import BaseModel, ConfigDict, computed_field


class LifecycleOutcome(str, Enum):
    """What a successful lifecycle operation actually did"""
    APPLIED = "applied"
    ALREADY_SATISFIED = "already_satisfied"


class DatasetSnapshot(BaseModel):
    """Mount and key state of one encrypted dataset at query time"""
    model_config = ConfigDict(frozen=True)

    name: str
    is_mounted: bool
    is_key_loaded: bool

    @computed_field
    def is_in_use(self) -> bool:
        return self.is_key_loaded and self.is_mounted
