"""
Unit tests for the delegated token store and viewer construction.
"""

from datetime import datetime, timedelta

from atlas_access.models import StoredToken
from atlas_access.token_store import InMemoryTokenStore, viewer_for


def test_empty_store_returns_none():
    assert InMemoryTokenStore().get_stored_token() is None


def test_store_and_read_token():
    store = InMemoryTokenStore()
    store.store_token("abc", username="jdoe_county", expires_in=3600)
    token = store.get_stored_token()
    assert token.access_token == "abc"
    assert token.username == "jdoe_county"
    assert token.expires_at > datetime.utcnow()


def test_expired_token_reads_as_none():
    expired = StoredToken("abc", expires_at=datetime.utcnow() - timedelta(seconds=1))
    assert InMemoryTokenStore(expired).get_stored_token() is None


def test_clear():
    store = InMemoryTokenStore(StoredToken("abc"))
    store.clear()
    assert store.get_stored_token() is None


def test_viewer_for_anonymous():
    viewer = viewer_for(False)
    assert viewer.has_session is False
    assert viewer.delegated_token is None
    assert viewer.can_probe_delegated is False


def test_viewer_for_linked_with_token():
    store = InMemoryTokenStore(StoredToken("abc"))
    viewer = viewer_for(True, "jdoe_county", store)
    assert viewer.delegated_token == "abc"
    assert viewer.can_probe_delegated is True


def test_viewer_for_empty_username_is_not_linked():
    viewer = viewer_for(True, "", InMemoryTokenStore(StoredToken("abc")))
    assert viewer.linked_platform_username is None
    assert viewer.can_probe_delegated is False


def test_zero_lifetime_token_is_already_expired():
    store = InMemoryTokenStore()
    stored = store.store_token("abc", expires_in=0)
    assert stored.expires_at is not None
    assert store.get_stored_token() is None


def test_viewer_for_ignores_expired_token():
    store = InMemoryTokenStore()
    store.store_token("abc", expires_in=0)
    viewer = viewer_for(True, "jdoe_county", store)
    assert viewer.delegated_token is None
    assert viewer.can_probe_delegated is False
