"""Derives instance network parameters from classified network specs."""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from stratus.errors import ConfigurationError
from stratus.models.instance import Instance, Subnet, ZoneHint
from stratus.models.network import DynamicNetwork, ManualNetwork, NetworkSpec, VipNetwork
from stratus.providers.base import ComputeProvider


logger = logging.getLogger(__name__)


class NetworkConfigurator:
    """Creation-time and post-creation network configuration for one instance.

    Networks are handled in name order; when several networks set the same
    single-valued field (subnet, private IP, DNS servers) the last one wins.
    """

    def __init__(
        self,
        networks: Mapping[str, NetworkSpec],
        default_security_groups: Optional[Sequence[str]] = None,
    ):
        """Initialize configurator from classified networks."""
        self.networks = {name: networks[name] for name in sorted(networks)}
        self.default_security_groups = list(default_security_groups or [])

        self.dynamic_networks: List[DynamicNetwork] = []
        self.manual_networks: List[ManualNetwork] = []
        self.vip_network: Optional[VipNetwork] = None

        for network in self.networks.values():
            if isinstance(network, ManualNetwork):
                self.manual_networks.append(network)
            elif isinstance(network, VipNetwork):
                if self.vip_network is not None:
                    raise ConfigurationError(
                        f"More than one vip network: '{self.vip_network.name}' and '{network.name}'"
                    )
                self.vip_network = network
            elif isinstance(network, DynamicNetwork):
                self.dynamic_networks.append(network)

    @property
    def vpc(self) -> bool:
        """Whether the instance is placed in a subnet."""
        return bool(self.manual_networks)

    def security_groups(self) -> List[str]:
        """Security groups requested by networks, else the configured defaults."""
        groups: List[str] = []
        for network in self.networks.values():
            for group in network.security_groups or []:
                if group not in groups:
                    groups.append(group)
        return groups or list(self.default_security_groups)

    def dns_servers(self) -> Optional[List[str]]:
        """DNS servers for the guest resolver, if any network sets them."""
        dns = None
        for network in self.networks.values():
            if network.dns:
                dns = list(network.dns)
        return dns

    async def resolve_subnets(self, compute: ComputeProvider) -> Dict[str, Subnet]:
        """Look up the subnet of every manual network."""
        subnets = {}
        for network in self.manual_networks:
            subnets[network.name] = await compute.lookup_subnet(network.subnet)
        return subnets

    def zone_hints(self, subnets: Mapping[str, Subnet]) -> List[ZoneHint]:
        """Availability zones implied by manual network subnets."""
        return [
            ZoneHint(source="network", name=name, zone=subnet.availability_zone)
            for name, subnet in subnets.items()
        ]

    def derive_creation_params(self, subnets: Mapping[str, Subnet]) -> Dict[str, Any]:
        """Network fields of the instance creation request.

        Subnet and private IP fields are only present when at least one
        manual network exists.
        """
        params: Dict[str, Any] = {"security_groups": self.security_groups()}

        for network in self.manual_networks:
            subnet = subnets.get(network.name)
            params["subnet_id"] = subnet.id if subnet else network.subnet
            params["private_ip_address"] = network.private_ip

        return params

    async def configure(self, compute: ComputeProvider, instance: Instance) -> None:
        """Apply network configuration that needs a running instance."""
        if self.vip_network is None:
            return

        address = self.vip_network.ip
        if instance.floating_address == address:
            logger.debug(f"Floating address {address} already on {instance.id}")
            return

        logger.info(f"Associating floating address {address} with {instance.id}")
        await compute.associate_floating_address(instance.id, address)
