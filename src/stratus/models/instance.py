"""Instance, request and placement models."""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class InstanceState(str, Enum):
    """Provider-observed instance state."""
    PENDING = "pending"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting-down"
    TERMINATED = "terminated"
    STOPPING = "stopping"
    STOPPED = "stopped"


class LifecyclePhase(str, Enum):
    """Phases an instance passes through during lifecycle operations."""
    REQUESTED = "requested"
    CREATING = "creating"
    POLLING = "polling"
    RUNNING = "running"
    CONFIGURING = "configuring"
    READY = "ready"
    TERMINATING = "terminating"
    TERMINATED = "terminated"
    FAILED = "failed"


class ResourcePool(BaseModel):
    """Caller's sizing and placement preferences."""
    instance_type: str = Field(..., description="Provider instance size")
    key_name: Optional[str] = None
    availability_zone: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class BlockDeviceMapping(BaseModel):
    """Device mapping entry of a creation request."""
    device_name: str
    virtual_name: Optional[str] = None
    delete_on_termination: Optional[bool] = None

    model_config = ConfigDict(frozen=True)


class InstanceRequest(BaseModel):
    """Parameters of a single create call.

    Optional fields left as ``None`` are omitted from :meth:`to_params`;
    an empty security group list is kept.
    """
    image_id: str
    instance_type: str
    user_data: str
    security_groups: List[str] = Field(default_factory=list)
    availability_zone: Optional[str] = None
    key_name: Optional[str] = None
    subnet_id: Optional[str] = None
    private_ip_address: Optional[str] = None
    block_device_mappings: List[BlockDeviceMapping] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def vpc(self) -> bool:
        """Whether the request targets a subnet."""
        return self.subnet_id is not None

    def to_params(self) -> Dict[str, Any]:
        """Request fields with absent values removed."""
        return self.model_dump(exclude_none=True)


class Instance(BaseModel):
    """Cached view of a provider instance."""
    id: str
    state: InstanceState
    floating_address: Optional[str] = None
    availability_zone: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class Subnet(BaseModel):
    """Result of a subnet lookup."""
    id: str
    availability_zone: Optional[str] = None


class ZoneHint(BaseModel):
    """Candidate availability zone from one source."""
    source: Literal["network", "disk", "resource_pool", "unknown"] = "unknown"
    name: Optional[str] = None
    zone: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        label = f"{self.source}:{self.name}" if self.name else self.source
        return f"{label}={self.zone}"
