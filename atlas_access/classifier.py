"""
Access classifier – combines the platform's sharing flag with the
application-level access flag.
"""

from typing import Dict, List, Mapping, Optional

from atlas_access.models import Classification, MapConfig, SharingResult


def classify(map_config: MapConfig, sharing_result: Optional[SharingResult]) -> Classification:
    """Return the single classification for a map.

    An administrator's ``private`` flag can tighten what the platform
    allows but never loosen it. Maps that cannot be verified against the
    platform (no item id) are config-restricted.
    """
    if not map_config.item_id:
        return Classification.CONFIG_RESTRICTED

    platform_public = sharing_result is not None and sharing_result.is_public is True

    if platform_public and not map_config.is_configured_private:
        return Classification.EFFECTIVELY_PUBLIC
    if platform_public:
        return Classification.CONFIG_RESTRICTED
    return Classification.PLATFORM_RESTRICTED


def partition(
    maps: List[MapConfig], sharing: Mapping[str, SharingResult]
) -> Dict[Classification, List[MapConfig]]:
    """Split *maps* into the three classification buckets, keeping input order."""
    buckets: Dict[Classification, List[MapConfig]] = {c: [] for c in Classification}
    for m in maps:
        result = sharing.get(m.item_id) if m.item_id else None
        buckets[classify(m, result)].append(m)
    return buckets
