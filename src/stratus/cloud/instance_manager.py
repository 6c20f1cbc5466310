"""Instance lifecycle: create, terminate and reboot."""

import json
import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from stratus.cloud.availability_zone import AvailabilityZoneSelector
from stratus.cloud.network_configurator import NetworkConfigurator
from stratus.errors import (
    InstanceStateError,
    RegistryError,
    ResourceMissingError,
    TransientProviderError,
)
from stratus.models.config import StratusConfig
from stratus.models.instance import (
    BlockDeviceMapping,
    InstanceRequest,
    InstanceState,
    LifecyclePhase,
    ResourcePool,
    ZoneHint,
)
from stratus.models.network import parse_networks
from stratus.providers.base import ComputeProvider, ImageLookup, SettingsRegistry
from stratus.utils.dicts import merge_dicts
from stratus.utils.polling import poll


logger = logging.getLogger(__name__)

EPHEMERAL_DEVICE = "/dev/sdb"
EPHEMERAL_VIRTUAL_NAME = "ephemeral0"


def resolve_key_name(*candidates: Optional[str]) -> Optional[str]:
    """Return the first candidate that is not None."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


class InstanceManager:
    """Drives instance creation, teardown and reboot against a compute provider.

    The manager holds no per-instance state, so one manager can serve
    concurrent operations on different instance ids.
    """

    def __init__(
        self,
        compute: ComputeProvider,
        registry: SettingsRegistry,
        stemcells: ImageLookup,
        az_selector: Optional[AvailabilityZoneSelector] = None,
        config: Optional[StratusConfig] = None,
    ):
        """Initialize instance manager."""
        self.compute = compute
        self.registry = registry
        self.stemcells = stemcells
        self.az_selector = az_selector or AvailabilityZoneSelector()
        self.config = config or StratusConfig()

    def _phase(self, subject: str, phase: LifecyclePhase) -> None:
        logger.debug(f"{subject}: {phase.value}")

    async def create(
        self,
        agent_id: str,
        stemcell_id: str,
        resource_pool: Union[ResourcePool, Mapping[str, Any]],
        network_spec: Mapping[str, Any],
        disk_locality: Optional[Sequence[str]] = None,
        environment: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Create an instance and register its settings.

        Returns:
            The provider instance id.
        """
        if not isinstance(resource_pool, ResourcePool):
            resource_pool = ResourcePool(**resource_pool)
        subject = f"agent {agent_id}"
        self._phase(subject, LifecyclePhase.REQUESTED)

        # Validation and placement run before anything is created
        networks = parse_networks(network_spec)
        configurator = NetworkConfigurator(
            networks, default_security_groups=self.config.cloud.default_security_groups
        )
        subnets = await configurator.resolve_subnets(self.compute)

        hints: List[ZoneHint] = [
            ZoneHint(source="resource_pool", zone=resource_pool.availability_zone)
        ]
        hints.extend(configurator.zone_hints(subnets))
        for disk_id in disk_locality or []:
            zone = await self.compute.get_disk_zone(disk_id)
            hints.append(ZoneHint(source="disk", name=disk_id, zone=zone))
        zone = self.az_selector.select(hints)

        root_device_name = await self.stemcells.root_device_name(stemcell_id)

        request = InstanceRequest(
            image_id=stemcell_id,
            instance_type=resource_pool.instance_type,
            availability_zone=zone,
            key_name=resolve_key_name(
                resource_pool.key_name, self.config.cloud.default_key_name
            ),
            user_data=self.user_data(configurator),
            block_device_mappings=[
                BlockDeviceMapping(device_name=root_device_name, delete_on_termination=True),
                BlockDeviceMapping(device_name=EPHEMERAL_DEVICE, virtual_name=EPHEMERAL_VIRTUAL_NAME),
            ],
            **configurator.derive_creation_params(subnets),
        )

        self._phase(subject, LifecyclePhase.CREATING)
        instance_id = await self.compute.create_instance(request)
        logger.info(f"Created instance {instance_id} for agent {agent_id} in zone {zone}")

        try:
            self._phase(instance_id, LifecyclePhase.POLLING)
            await self.wait_for_state(instance_id, InstanceState.RUNNING)
            self._phase(instance_id, LifecyclePhase.RUNNING)

            self._phase(instance_id, LifecyclePhase.CONFIGURING)
            await self._configure_networks(configurator, instance_id)
        except Exception as e:
            self._phase(instance_id, LifecyclePhase.FAILED)
            logger.error(f"Instance {instance_id} failed before registration: {e}")
            raise

        settings = self.initial_settings(
            agent_id, network_spec, root_device_name, environment
        )
        await self.registry.put_settings(instance_id, settings)
        self._phase(instance_id, LifecyclePhase.READY)
        return instance_id

    async def terminate(self, instance_id: str) -> None:
        """Terminate an instance and drop its settings.

        An instance that is already gone counts as terminated. Settings are
        deleted even when waiting for termination fails; a registry failure
        then is logged and the termination error is raised.
        """
        self._phase(instance_id, LifecyclePhase.TERMINATING)
        terminated = False
        try:
            try:
                await self.compute.terminate_instance(instance_id)
            except ResourceMissingError:
                logger.info(f"Instance {instance_id} already gone")
            else:
                await self.wait_for_state(instance_id, InstanceState.TERMINATED)
            self._phase(instance_id, LifecyclePhase.TERMINATED)
            terminated = True
        finally:
            try:
                await self.registry.delete_settings(instance_id)
            except RegistryError as e:
                if terminated:
                    raise
                # The termination error is the one reported
                logger.error(f"Failed to delete settings for {instance_id}: {e}")

    async def reboot(self, instance_id: str) -> None:
        """Reboot an instance."""
        logger.info(f"Rebooting instance {instance_id}")
        await self.compute.reboot_instance(instance_id)

    async def wait_for_state(self, instance_id: str, target: InstanceState) -> None:
        """Poll the provider until an instance reaches ``target``.

        While waiting for termination a missing instance is success; while
        waiting for any other state it is retried until the budget runs out.
        """
        async def reached() -> bool:
            instance = await self.compute.get_instance(instance_id)
            if instance.state == target:
                return True
            if target != InstanceState.TERMINATED and instance.state in (
                InstanceState.SHUTTING_DOWN, InstanceState.TERMINATED
            ):
                raise InstanceStateError(
                    f"Instance {instance_id} is {instance.state.value} "
                    f"while waiting for {target.value}"
                )
            return False

        if target == InstanceState.TERMINATED:
            recoverable = (TransientProviderError,)
            success_on = (ResourceMissingError,)
        else:
            recoverable = (TransientProviderError, ResourceMissingError)
            success_on = ()

        await poll(
            reached,
            interval=self.config.poll.interval,
            max_attempts=self.config.poll.max_attempts,
            recoverable=recoverable,
            success_on=success_on,
            description=f"instance {instance_id} to be {target.value}",
        )

    async def _configure_networks(self, configurator: NetworkConfigurator, instance_id: str) -> None:
        async def configure_once() -> bool:
            instance = await self.compute.get_instance(instance_id)
            await configurator.configure(self.compute, instance)
            return True

        await poll(
            configure_once,
            interval=self.config.poll.interval,
            max_attempts=self.config.poll.max_attempts,
            recoverable=(TransientProviderError,),
            description=f"network configuration of {instance_id}",
        )

    def user_data(self, configurator: NetworkConfigurator) -> str:
        """Boot metadata read by the guest before the registry is reachable."""
        data: Dict[str, Any] = {"registry": {"endpoint": self.registry.endpoint}}
        dns = configurator.dns_servers()
        if dns:
            data["dns"] = {"nameserver": dns}
        return json.dumps(data)

    def initial_settings(
        self,
        agent_id: str,
        network_spec: Mapping[str, Any],
        root_device_name: str,
        environment: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Registry settings for a freshly created instance."""
        settings: Dict[str, Any] = {
            "vm": {"name": f"vm-{uuid.uuid4()}"},
            "agent_id": agent_id,
            "networks": dict(network_spec),
            "disks": {
                "system": root_device_name,
                "ephemeral": EPHEMERAL_DEVICE,
                "persistent": {},
            },
            "registry": {"endpoint": self.registry.endpoint},
        }
        if environment:
            settings["env"] = environment
        return merge_dicts(settings, self.config.agent)
