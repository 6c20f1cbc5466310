"""Compute, image and settings registry providers."""

from stratus.providers.base import ComputeProvider, ImageLookup, SettingsRegistry
from stratus.providers.registry import ProviderRegistry, get_provider_registry

__all__ = [
    "ComputeProvider",
    "ImageLookup",
    "SettingsRegistry",
    "ProviderRegistry",
    "get_provider_registry",
]
