"""
Unit tests for the delegated-access prober.
"""

import asyncio

import httpx

from atlas_access.delegated import check_delegated_access
from atlas_access.platform import PlatformClient

from conftest import FakePlatform, run


def test_returns_only_granted_ids():
    fake = FakePlatform(items={"x2": "private", "x3": "org"}, grants={"x2"})
    result = run(lambda c: check_delegated_access(c, ["x2", "x3"], "tok-123"), fake)
    assert result == {"x2"}


def test_no_token_makes_no_network_call():
    fake = FakePlatform(items={"x2": "private"}, grants={"x2"})
    assert run(lambda c: check_delegated_access(c, ["x2"], None), fake) == set()
    assert run(lambda c: check_delegated_access(c, ["x2"], ""), fake) == set()
    assert fake.calls == []


def test_empty_id_list_makes_no_network_call():
    fake = FakePlatform()
    assert run(lambda c: check_delegated_access(c, [], "tok-123"), fake) == set()
    assert fake.calls == []


def test_wrong_token_is_denied():
    fake = FakePlatform(items={"x2": "private"}, grants={"x2"})
    assert run(lambda c: check_delegated_access(c, ["x2"], "someone-else"), fake) == set()


def test_network_failure_denies_only_the_failed_item():
    fake = FakePlatform(items={"x2": "private", "x4": "private"}, grants={"x2", "x4"}, failing={"x4"})
    result = run(lambda c: check_delegated_access(c, ["x2", "x4"], "tok-123"), fake)
    assert result == {"x2"}


def test_invalid_token_error_denies_everything():
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": {"code": 498, "message": "Invalid token."}})

    async def _go():
        async with PlatformClient(transport=httpx.MockTransport(handler)) as client:
            return await check_delegated_access(client, ["x2", "x3"], "expired")

    assert asyncio.run(_go()) == set()


def test_token_sent_as_bearer_header():
    fake = FakePlatform(items={"x2": "private"}, grants={"x2"})
    run(lambda c: check_delegated_access(c, ["x2", "x2"], "tok-123"), fake)
    assert fake.calls == [("x2", "Bearer tok-123")]
