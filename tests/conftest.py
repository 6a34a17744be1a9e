"""
Shared fakes: an in-process ArcGIS-style portal served through httpx.MockTransport.
"""

import asyncio

import httpx
import pytest

from atlas_access.platform import PlatformClient

NOT_FOUND = {"error": {"code": 400, "message": "Item does not exist or is inaccessible."}}
FORBIDDEN = {"error": {"code": 403, "message": "You do not have permissions to access this resource or perform this operation."}}


class FakePlatform:
    """Mimic the portal's item endpoint.

    ``items`` maps item id -> sharing level ("public", "org", "private").
    Anonymous lookups only see public items. Lookups with the bearer token
    see public items plus the ids in ``grants``.
    """

    def __init__(self, items=None, grants=(), token="tok-123", failing=()):
        self.items = dict(items or {})
        self.grants = set(grants)
        self.token = token
        self.failing = set(failing)
        self.gates = {}
        self.calls = []

    def _item(self, item_id):
        return {"id": item_id, "title": f"Item {item_id}", "access": self.items[item_id]}

    async def handler(self, request: httpx.Request) -> httpx.Response:
        item_id = request.url.path.rsplit("/", 1)[-1]
        auth = request.headers.get("X-Esri-Authorization")
        self.calls.append((item_id, auth))

        if item_id in self.gates:
            await self.gates[item_id].wait()

        if item_id in self.failing:
            raise httpx.ConnectError("connection refused", request=request)
        if item_id not in self.items:
            return httpx.Response(200, json=NOT_FOUND)

        if self.items[item_id] == "public":
            return httpx.Response(200, json=self._item(item_id))
        if auth == f"Bearer {self.token}" and item_id in self.grants:
            return httpx.Response(200, json=self._item(item_id))
        return httpx.Response(200, json=FORBIDDEN)

    def client(self) -> PlatformClient:
        return PlatformClient(
            portal_url="https://portal.test",
            transport=httpx.MockTransport(self.handler),
        )

    def delegated_calls(self):
        return [item_id for item_id, auth in self.calls if auth]


@pytest.fixture
def platform():
    return FakePlatform()


def run(coro_factory, fake):
    """Run ``coro_factory(client)`` against *fake* and close the client."""
    async def _go():
        async with fake.client() as client:
            return await coro_factory(client)
    return asyncio.run(_go())
