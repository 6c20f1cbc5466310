"""Pydantic models for configuration and validation."""

from stratus.models.config import (
    StratusConfig,
    LoggingConfig,
    CloudConfig,
    RegistryConfig,
    PollConfig,
)
from stratus.models.instance import (
    BlockDeviceMapping,
    Instance,
    InstanceRequest,
    InstanceState,
    LifecyclePhase,
    ResourcePool,
    Subnet,
    ZoneHint,
)
from stratus.models.network import (
    DynamicNetwork,
    ManualNetwork,
    NetworkSpec,
    NetworkType,
    VipNetwork,
    parse_network,
    parse_networks,
)

__all__ = [
    "StratusConfig",
    "LoggingConfig",
    "CloudConfig",
    "RegistryConfig",
    "PollConfig",
    "BlockDeviceMapping",
    "Instance",
    "InstanceRequest",
    "InstanceState",
    "LifecyclePhase",
    "ResourcePool",
    "Subnet",
    "ZoneHint",
    "DynamicNetwork",
    "ManualNetwork",
    "NetworkSpec",
    "NetworkType",
    "VipNetwork",
    "parse_network",
    "parse_networks",
]
