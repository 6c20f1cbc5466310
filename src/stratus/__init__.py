"""
Stratus - cloud provider adapter for virtual machine lifecycle.

Turns create/terminate/reboot requests from an infrastructure orchestrator
into compute API calls, resolving network attachment and availability zone
placement and waiting out the provider's eventual consistency.
"""

__version__ = "1.0.0"

# Re-export key components for easier access
from stratus.models.config import StratusConfig
from stratus.models.instance import InstanceRequest, ResourcePool
from stratus.models.network import NetworkSpec, parse_networks

__all__ = [
    "StratusConfig",
    "InstanceRequest",
    "ResourcePool",
    "NetworkSpec",
    "parse_networks",
]
