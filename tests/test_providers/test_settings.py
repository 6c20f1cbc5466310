"""Tests for the HTTP settings registry client."""

import base64
import json

import httpx
import pytest

from stratus.errors import RegistryError
from stratus.providers.settings import HttpSettingsRegistry


def make_registry(handler, **kwargs):
    return HttpSettingsRegistry(
        "http://registry:25777/", transport=httpx.MockTransport(handler), **kwargs
    )


class TestHttpSettingsRegistry:
    """Test registry client configuration."""

    def test_endpoint_trailing_slash(self):
        """Test the endpoint is normalized."""
        assert HttpSettingsRegistry("http://registry:25777/").endpoint == "http://registry:25777"

    def test_auth_only_with_user(self):
        """Test credentials are only used when a user is set."""
        assert HttpSettingsRegistry("http://registry").auth is None
        assert HttpSettingsRegistry("http://registry", user="admin", password="secret").auth == (
            "admin", "secret"
        )


@pytest.mark.asyncio
class TestHttpSettingsRegistryRequests:
    """Test registry HTTP requests."""

    async def test_put_settings(self):
        """Test settings are PUT as JSON with basic auth."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200)

        registry = make_registry(handler, user="admin", password="secret")
        await registry.put_settings("i-12345678", {"agent_id": "agent-1"})

        request = requests[0]
        assert request.method == "PUT"
        assert request.url.path == "/instances/i-12345678/settings"
        assert json.loads(request.content) == {"agent_id": "agent-1"}
        expected = base64.b64encode(b"admin:secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"

    async def test_put_settings_failure(self):
        """Test a non-success status raises RegistryError."""
        registry = make_registry(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(RegistryError) as exc_info:
            await registry.put_settings("i-12345678", {})

        assert "500" in str(exc_info.value)

    async def test_put_settings_connection_error(self):
        """Test transport failures raise RegistryError."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        registry = make_registry(handler)

        with pytest.raises(RegistryError):
            await registry.put_settings("i-12345678", {})

    async def test_delete_settings(self):
        """Test settings are deleted."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(204)

        await make_registry(handler).delete_settings("i-12345678")

        assert requests[0].method == "DELETE"
        assert requests[0].url.path == "/instances/i-12345678/settings"

    async def test_delete_missing_settings(self):
        """Test deleting absent settings is not an error."""
        await make_registry(lambda request: httpx.Response(404)).delete_settings("i-12345678")

    async def test_delete_settings_failure(self):
        """Test other failures raise RegistryError."""
        registry = make_registry(lambda request: httpx.Response(503))

        with pytest.raises(RegistryError):
            await registry.delete_settings("i-12345678")
