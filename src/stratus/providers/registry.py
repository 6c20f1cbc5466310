"""Registry of compute provider backends."""

import logging
from typing import Any, Dict, Type

from stratus.errors import ConfigurationError
from stratus.providers.base import ComputeProvider
from stratus.providers.ec2 import Ec2ComputeProvider


logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Registry for compute provider backends."""

    def __init__(self):
        """Initialize provider registry."""
        self._provider_classes: Dict[str, Type[ComputeProvider]] = {
            "ec2": Ec2ComputeProvider,
        }

    def register(self, name: str, provider_class: Type[ComputeProvider]) -> None:
        """Register a backend class under a name."""
        self._provider_classes[name] = provider_class
        logger.debug(f"Registered compute provider: {name}")

    def create(self, name: str, **options: Any) -> ComputeProvider:
        """Instantiate the backend registered under ``name``."""
        provider_class = self._provider_classes.get(name)
        if provider_class is None:
            raise ConfigurationError(f"Unknown compute provider: {name}")
        return provider_class(**options)

    def list_providers(self) -> list[str]:
        """List registered backend names."""
        return list(self._provider_classes.keys())


_registry = ProviderRegistry()


def get_provider_registry() -> ProviderRegistry:
    """Return the process-wide provider registry."""
    return _registry
