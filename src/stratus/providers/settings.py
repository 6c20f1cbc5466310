"""HTTP client for the instance settings registry."""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from stratus.errors import RegistryError
from stratus.providers.base import SettingsRegistry


logger = logging.getLogger(__name__)


class HttpSettingsRegistry(SettingsRegistry):
    """Settings registry reached over HTTP.

    Settings live at ``{endpoint}/instances/{instance_id}/settings``.
    """

    def __init__(
        self,
        endpoint: str,
        user: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize registry client."""
        self._endpoint = endpoint.rstrip("/")
        self.auth = (user, password or "") if user else None
        self.timeout = timeout
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._endpoint,
            auth=self.auth,
            timeout=self.timeout,
            transport=self.transport,
        )

    def _settings_path(self, instance_id: str) -> str:
        return f"/instances/{instance_id}/settings"

    async def put_settings(self, instance_id: str, settings: Dict[str, Any]) -> None:
        """Store settings for an instance."""
        try:
            async with self._client() as client:
                response = await client.put(
                    self._settings_path(instance_id),
                    content=json.dumps(settings),
                    headers={"Content-Type": "application/json"},
                )
        except httpx.RequestError as e:
            raise RegistryError(f"Cannot update settings for {instance_id}: {e}") from e

        if not response.is_success:
            raise RegistryError(
                f"Cannot update settings for {instance_id}, "
                f"got HTTP {response.status_code}: {response.text}"
            )
        logger.debug(f"Updated registry settings for {instance_id}")

    async def delete_settings(self, instance_id: str) -> None:
        """Remove settings for an instance; a missing entry is fine."""
        try:
            async with self._client() as client:
                response = await client.delete(self._settings_path(instance_id))
        except httpx.RequestError as e:
            raise RegistryError(f"Cannot delete settings for {instance_id}: {e}") from e

        if response.status_code == 404:
            logger.debug(f"No registry settings to delete for {instance_id}")
            return
        if not response.is_success:
            raise RegistryError(
                f"Cannot delete settings for {instance_id}, "
                f"got HTTP {response.status_code}: {response.text}"
            )
        logger.debug(f"Deleted registry settings for {instance_id}")
