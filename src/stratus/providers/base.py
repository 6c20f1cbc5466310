"""Collaborator interfaces consumed by the instance manager."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from stratus.models.instance import Instance, InstanceRequest, Subnet


class ComputeProvider(ABC):
    """Compute API of a single cloud.

    Implementations raise ``TransientProviderError`` for retryable
    failures, ``ResourceMissingError`` when the addressed resource does
    not exist and ``UnhandledProviderError`` for everything else. They
    never decide whether an error is recoverable.
    """

    @abstractmethod
    async def create_instance(self, request: InstanceRequest) -> str:
        """Submit an instance creation request and return the instance id."""
        pass

    @abstractmethod
    async def get_instance(self, instance_id: str) -> Instance:
        """Observe the current state of an instance."""
        pass

    @abstractmethod
    async def terminate_instance(self, instance_id: str) -> None:
        """Request termination of an instance."""
        pass

    @abstractmethod
    async def reboot_instance(self, instance_id: str) -> None:
        """Request a reboot of an instance."""
        pass

    @abstractmethod
    async def associate_floating_address(self, instance_id: str, address: str) -> None:
        """Bind a floating address to an instance."""
        pass

    @abstractmethod
    async def lookup_subnet(self, subnet_id: str) -> Subnet:
        """Resolve a subnet identifier."""
        pass

    @abstractmethod
    async def get_disk_zone(self, disk_id: str) -> str:
        """Return the availability zone a disk lives in."""
        pass


class ImageLookup(ABC):
    """Read-only stemcell/image information."""

    @abstractmethod
    async def root_device_name(self, image_id: str) -> str:
        """Return the root device name of an image."""
        pass


class SettingsRegistry(ABC):
    """Key-value store of boot settings keyed by instance id."""

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """URL instances use to reach the registry."""
        pass

    @abstractmethod
    async def put_settings(self, instance_id: str, settings: Dict[str, Any]) -> None:
        """Store settings for an instance."""
        pass

    @abstractmethod
    async def delete_settings(self, instance_id: str) -> None:
        """Remove settings for an instance; absent settings are not an error."""
        pass
