"""
Domain dataclasses used across the application.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from atlas_access.config import ACCESS_PRIVATE, ACCESS_PUBLIC

_ITEM_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def normalize_item_id(value: Optional[str]) -> Optional[str]:
    """Return a usable platform item id, or None when missing or malformed."""
    if value is None:
        return None
    value = str(value).strip()
    if not value or not _ITEM_ID_RE.match(value):
        return None
    return value


@dataclass(frozen=True)
class MapConfig:
    """One entry in a tenant's configured map list."""
    name: str
    item_id: Optional[str] = None
    access: str = ACCESS_PUBLIC      # "public" or "private"
    portal_url: Optional[str] = None # None -> configured portal
    title: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "item_id", normalize_item_id(self.item_id))

    @property
    def is_configured_private(self) -> bool:
        return self.access == ACCESS_PRIVATE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title or self.name,
            "item_id": self.item_id,
            "access": self.access,
            "portal_url": self.portal_url,
        }


@dataclass(frozen=True)
class SharingResult:
    """Platform sharing state for one item id."""
    is_public: bool
    access: Optional[str] = None  # sharing level reported by the platform
    error: Optional[str] = None


@dataclass(frozen=True)
class Viewer:
    """Identity context of the current session."""
    has_session: bool = False
    linked_platform_username: Optional[str] = None
    delegated_token: Optional[str] = None

    @property
    def can_probe_delegated(self) -> bool:
        return bool(self.has_session and self.linked_platform_username and self.delegated_token)


@dataclass(frozen=True)
class StoredToken:
    """Delegated platform credential held by an external token store."""
    access_token: str
    username: Optional[str] = None
    expires_at: Optional[datetime] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.utcnow()) >= self.expires_at


@dataclass
class SessionContext:
    """Represents a signed-in application user."""
    user_id: int
    display_name: str
    org_id: str
    linked_platform_username: Optional[str]


class Classification(str, Enum):
    EFFECTIVELY_PUBLIC = "effectively_public"
    CONFIG_RESTRICTED = "config_restricted"
    PLATFORM_RESTRICTED = "platform_restricted"


@dataclass
class ResolutionResult:
    """Outcome of one visibility resolution pass."""
    accessible: List[MapConfig] = field(default_factory=list)
    public: List[MapConfig] = field(default_factory=list)
    private: List[MapConfig] = field(default_factory=list)
    login_required: bool = False
    has_completed: bool = False
    sharing: Dict[str, SharingResult] = field(default_factory=dict)
    configured: List[MapConfig] = field(default_factory=list)

    def is_map_public(self, item_id: Optional[str]) -> bool:
        result = self.sharing.get(item_id) if item_id else None
        return bool(result and result.is_public)

    @property
    def all_maps_public(self) -> bool:
        return self.has_completed and not self.private and bool(self.public)

    @property
    def all_maps_configured_private(self) -> bool:
        return bool(self.configured) and all(m.is_configured_private for m in self.configured)

    @property
    def default_map_is_public(self) -> bool:
        if not (self.has_completed and self.configured):
            return False
        return self.configured[0] in self.public

    @property
    def show_map_picker(self) -> bool:
        return len(self.accessible) > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accessible": [m.to_dict() for m in self.accessible],
            "public": [m.to_dict() for m in self.public],
            "private": [m.to_dict() for m in self.private],
            "login_required": self.login_required,
            "has_completed": self.has_completed,
            "all_maps_public": self.all_maps_public,
            "all_maps_configured_private": self.all_maps_configured_private,
            "default_map_is_public": self.default_map_is_public,
            "show_map_picker": self.show_map_picker,
        }
