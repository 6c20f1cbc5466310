"""Tests for ProviderRegistry."""

import pytest

from stratus.errors import ConfigurationError
from stratus.providers.ec2 import Ec2ComputeProvider
from stratus.providers.registry import ProviderRegistry, get_provider_registry


class FakeProvider:
    """Stand-in backend recording its construction options."""

    def __init__(self, **options):
        self.options = options


class TestProviderRegistry:
    """Test ProviderRegistry lookup and construction."""

    def test_ec2_registered_by_default(self):
        """Test the EC2 backend is available without registration."""
        registry = ProviderRegistry()

        assert "ec2" in registry.list_providers()

    def test_create_ec2(self):
        """Test creating the EC2 backend passes options through."""
        provider = ProviderRegistry().create("ec2", region="eu-west-1")

        assert isinstance(provider, Ec2ComputeProvider)
        assert provider.region == "eu-west-1"

    def test_register(self):
        """Test registering and creating a custom backend."""
        registry = ProviderRegistry()
        registry.register("fake", FakeProvider)

        provider = registry.create("fake", region="local")

        assert isinstance(provider, FakeProvider)
        assert provider.options == {"region": "local"}
        assert registry.list_providers() == ["ec2", "fake"]

    def test_unknown_provider(self):
        """Test unknown backend names are configuration errors."""
        with pytest.raises(ConfigurationError) as exc_info:
            ProviderRegistry().create("openstack")

        assert "openstack" in str(exc_info.value)

    def test_global_registry(self):
        """Test the process-wide registry is shared."""
        assert get_provider_registry() is get_provider_registry()
