"""Adapter entry point wiring providers, registry and instance manager."""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from stratus.cloud.config import load_config
from stratus.cloud.instance_manager import InstanceManager
from stratus.models.config import StratusConfig
from stratus.providers.base import ComputeProvider, ImageLookup, SettingsRegistry
from stratus.providers.registry import get_provider_registry
from stratus.providers.settings import HttpSettingsRegistry
from stratus.utils.logging import setup_logging


logger = logging.getLogger(__name__)


class StratusCloud:
    """Cloud adapter exposing VM lifecycle operations to an orchestrator."""

    def __init__(
        self,
        config: StratusConfig,
        compute: Optional[ComputeProvider] = None,
        registry: Optional[SettingsRegistry] = None,
        stemcells: Optional[ImageLookup] = None,
    ):
        """Initialize the adapter, building missing collaborators from config."""
        self.config = config

        if compute is None:
            cloud = config.cloud
            compute = get_provider_registry().create(
                cloud.provider,
                region=cloud.region,
                access_key_id=cloud.access_key_id,
                secret_access_key=cloud.secret_access_key,
                endpoint_url=cloud.endpoint_url,
            )
        if registry is None:
            registry = HttpSettingsRegistry(
                endpoint=config.registry.endpoint,
                user=config.registry.user,
                password=config.registry.password,
                timeout=config.registry.timeout,
            )
        if stemcells is None:
            if not isinstance(compute, ImageLookup):
                raise TypeError(
                    f"{type(compute).__name__} cannot look up images; pass stemcells explicitly"
                )
            stemcells = compute

        self.instance_manager = InstanceManager(
            compute=compute,
            registry=registry,
            stemcells=stemcells,
            config=config,
        )
        logger.debug(f"Adapter initialized for provider {config.cloud.provider}")

    @classmethod
    async def from_file(cls, path: Path) -> "StratusCloud":
        """Load configuration, set up logging and build the adapter."""
        config = await load_config(path)
        setup_logging(config.logging.level)
        return cls(config)

    async def create_vm(
        self,
        agent_id: str,
        stemcell_id: str,
        resource_pool: Mapping[str, Any],
        networks: Mapping[str, Any],
        disk_locality: Optional[Sequence[str]] = None,
        environment: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Create a VM and return its instance id."""
        return await self.instance_manager.create(
            agent_id,
            stemcell_id,
            resource_pool,
            networks,
            disk_locality=disk_locality,
            environment=environment,
        )

    async def delete_vm(self, instance_id: str) -> None:
        """Terminate a VM."""
        await self.instance_manager.terminate(instance_id)

    async def reboot_vm(self, instance_id: str) -> None:
        """Reboot a VM."""
        await self.instance_manager.reboot(instance_id)
