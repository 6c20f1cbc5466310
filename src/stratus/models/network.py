"""Network specification models."""

from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from stratus.errors import ConfigurationError


class NetworkType(str, Enum):
    """Network attachment variants."""
    DYNAMIC = "dynamic"
    MANUAL = "manual"
    VIP = "vip"


class NetworkSpec(BaseModel):
    """A named network attachment request."""
    name: str = Field(..., description="Network name")
    type: NetworkType
    ip: Optional[str] = None
    dns: Optional[List[str]] = None
    cloud_properties: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("cloud_properties", mode="before")
    @classmethod
    def _null_cloud_properties(cls, v):
        return {} if v is None else v

    @property
    def security_groups(self) -> Optional[List[str]]:
        """Security groups requested by this network, if any."""
        groups = self.cloud_properties.get("security_groups")
        if groups is None:
            return None
        if isinstance(groups, str):
            return [groups]
        return list(groups)


class DynamicNetwork(NetworkSpec):
    """Network addressed by the provider at boot."""
    type: Literal[NetworkType.DYNAMIC] = NetworkType.DYNAMIC


class ManualNetwork(NetworkSpec):
    """Network with a static IP inside a provider subnet."""
    type: Literal[NetworkType.MANUAL] = NetworkType.MANUAL

    @model_validator(mode="after")
    def _require_subnet_and_ip(self):
        if not self.cloud_properties.get("subnet"):
            raise ValueError("subnet required for manual network")
        if not self.ip:
            raise ValueError("ip required for manual network")
        return self

    @property
    def subnet(self) -> str:
        """Provider subnet identifier."""
        return self.cloud_properties["subnet"]

    @property
    def private_ip(self) -> str:
        """Requested static private IP."""
        return self.ip


class VipNetwork(NetworkSpec):
    """Floating address associated after the instance is running."""
    type: Literal[NetworkType.VIP] = NetworkType.VIP

    @model_validator(mode="after")
    def _require_ip(self):
        if not self.ip:
            raise ValueError("ip required for vip network")
        return self


_NETWORK_CLASSES = {
    NetworkType.DYNAMIC: DynamicNetwork,
    NetworkType.MANUAL: ManualNetwork,
    NetworkType.VIP: VipNetwork,
}


def parse_network(name: str, raw: Optional[Mapping[str, Any]]) -> NetworkSpec:
    """Classify and validate a single raw network definition.

    A missing ``type`` means a manual network. The network is always named
    by ``name``; a ``name`` key inside the definition is ignored.

    Raises:
        ConfigurationError: If the type is unknown or a required field is missing.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            f"Invalid network '{name}': expected a mapping, got {type(raw).__name__}"
        )
    raw = dict(raw)
    raw.pop("name", None)
    type_name = raw.pop("type", None) or NetworkType.MANUAL.value

    try:
        network_type = NetworkType(type_name)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid network type '{type_name}' for network '{name}'"
        ) from e

    network_class = _NETWORK_CLASSES[network_type]
    try:
        return network_class(name=name, **raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid network '{name}': {e}") from e


def parse_networks(spec: Mapping[str, Optional[Mapping[str, Any]]]) -> Dict[str, NetworkSpec]:
    """Classify every network in a name -> definition mapping.

    The result is ordered by network name so downstream merges are
    deterministic.
    """
    return {name: parse_network(name, spec[name]) for name in sorted(spec)}
