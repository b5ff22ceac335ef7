from typing import Dict, List, Optional
import enum

from pydantic import BaseModel, Field, field_validator

from binder.config import RESOURCE_STORAGE
from binder.quantity import parse_quantity

# ============================================================================
# ENUM DEFINITIONS
# ============================================================================

class AccessMode(str, enum.Enum):
    """How a volume can be mounted by its consumers"""
    READ_WRITE_ONCE = "ReadWriteOnce"
    READ_ONLY_MANY = "ReadOnlyMany"
    READ_WRITE_MANY = "ReadWriteMany"


def _parse_resource_list(value):
    if value is None:
        return {}
    return {str(name): parse_quantity(qty) for name, qty in dict(value).items()}


# ============================================================================
# OBJECT DEFINITIONS
# ============================================================================

class ObjectReference(BaseModel):
    """Pointer from a bound volume to the claim that owns it"""
    kind: str = "PersistentVolumeClaim"
    namespace: str = ""
    name: str
    uid: Optional[str] = None


class PersistentVolume(BaseModel):
    """Storage resource offered to claims. Cluster-scoped unless namespace is set."""
    name: str = ""
    namespace: str = ""
    access_modes: List[AccessMode] = Field(default_factory=list)
    capacity: Dict[str, int] = Field(default_factory=dict)
    claim_ref: Optional[ObjectReference] = None

    @field_validator("capacity", mode="before")
    @classmethod
    def parse_capacity(cls, value):
        return _parse_resource_list(value)

    @property
    def is_bound(self) -> bool:
        return self.claim_ref is not None

    @property
    def storage_capacity(self) -> int:
        return self.capacity.get(RESOURCE_STORAGE, 0)


class PersistentVolumeClaim(BaseModel):
    """Request for a volume with the given access modes and minimum storage"""
    name: str
    namespace: str = ""
    access_modes: List[AccessMode] = Field(default_factory=list)
    requests: Dict[str, int] = Field(default_factory=dict)

    @field_validator("requests", mode="before")
    @classmethod
    def parse_requests(cls, value):
        return _parse_resource_list(value)

    @property
    def requested_storage(self) -> int:
        return self.requests.get(RESOURCE_STORAGE, 0)
