"""
Async client for the upstream mapping platform's portal REST API.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from atlas_access.config import ARCGIS_PORTAL_URL, ITEMS_PATH, PLATFORM_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class PlatformError(Exception):
    """The platform answered with an error payload instead of an item."""

    def __init__(self, code: Optional[int], message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class PlatformClient:
    """Thin wrapper over httpx.AsyncClient for item lookups.

    Anonymous lookups report the item's sharing level; lookups carrying a
    delegated token succeed only when the token holder is authorized to
    read the item.
    """

    def __init__(
        self,
        portal_url: str = ARCGIS_PORTAL_URL,
        timeout: float = PLATFORM_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.portal_url = portal_url.rstrip("/")
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    def item_url(self, item_id: str, portal_url: Optional[str] = None) -> str:
        base = (portal_url or self.portal_url).rstrip("/")
        return f"{base}{ITEMS_PATH}/{item_id}"

    async def fetch_item(
        self,
        item_id: str,
        token: Optional[str] = None,
        portal_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Return the item's JSON description or raise.

        Raises PlatformError for an ``error`` payload, httpx.HTTPError for
        transport and status failures, ValueError for a non-JSON body.
        """
        headers = {}
        if token:
            headers["X-Esri-Authorization"] = f"Bearer {token}"

        response = await self._client.get(
            self.item_url(item_id, portal_url),
            params={"f": "json"},
            headers=headers,
        )
        response.raise_for_status()
        data = response.json()

        if not isinstance(data, dict):
            raise ValueError(f"Unexpected item payload for {item_id}")
        if "error" in data:
            err = data["error"] or {}
            raise PlatformError(err.get("code"), err.get("message") or "Item not accessible")
        return data

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "PlatformClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
