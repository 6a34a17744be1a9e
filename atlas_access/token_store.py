"""
Delegated token storage – the engine only ever reads from it.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional

from atlas_access.models import StoredToken, Viewer


class TokenStore(ABC):
    """Source of the viewer's delegated platform credential."""

    @abstractmethod
    def get_stored_token(self) -> Optional[StoredToken]:
        """Return the current, unexpired token or None."""


class InMemoryTokenStore(TokenStore):
    """Holds one token per session, written by the sign-in collaborator."""

    def __init__(self, token: Optional[StoredToken] = None):
        self._token = token

    def store_token(
        self,
        access_token: str,
        username: Optional[str] = None,
        expires_in: Optional[int] = None,
    ) -> StoredToken:
        expires_at = None
        if expires_in is not None:
            expires_at = datetime.utcnow() + timedelta(seconds=int(expires_in))
        self._token = StoredToken(access_token=access_token, username=username, expires_at=expires_at)
        return self._token

    def clear(self) -> None:
        self._token = None

    def get_stored_token(self) -> Optional[StoredToken]:
        if self._token is None or not self._token.access_token:
            return None
        if self._token.is_expired():
            return None
        return self._token


def viewer_for(
    has_session: bool,
    linked_platform_username: Optional[str] = None,
    token_store: Optional[TokenStore] = None,
) -> Viewer:
    """Build a Viewer snapshot from session state and a token store."""
    stored = token_store.get_stored_token() if token_store is not None else None
    return Viewer(
        has_session=bool(has_session),
        linked_platform_username=linked_platform_username or None,
        delegated_token=stored.access_token if stored else None,
    )
