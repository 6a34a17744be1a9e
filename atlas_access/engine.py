"""
Map visibility resolution – sequences the probers and the classifier and
applies the viewer's identity to produce the accessible map list.
"""

import logging
from typing import List

from atlas_access.classifier import partition
from atlas_access.delegated import check_delegated_access
from atlas_access.models import Classification, MapConfig, ResolutionResult, Viewer
from atlas_access.platform import PlatformClient
from atlas_access.sharing import check_multiple_sharing

logger = logging.getLogger(__name__)


async def resolve_visibility(
    maps: List[MapConfig], viewer: Viewer, client: PlatformClient
) -> ResolutionResult:
    """Resolve which of *maps* the *viewer* may see.

    Accessible maps are ordered most-restricted first so that picking the
    first entry as the default surfaces a map the viewer was specifically
    granted: unlocked platform-restricted, then config-restricted, then
    effectively public. Probe failures never raise; they deny.
    """
    maps = list(maps or [])
    if not maps:
        return ResolutionResult(login_required=True, has_completed=True)

    sharing = await check_multiple_sharing(client, maps)
    buckets = partition(maps, sharing)

    effectively_public = buckets[Classification.EFFECTIVELY_PUBLIC]
    config_restricted = buckets[Classification.CONFIG_RESTRICTED]
    platform_restricted = buckets[Classification.PLATFORM_RESTRICTED]
    # identical configs classify identically
    private = [m for m in maps if m not in effectively_public]

    if not viewer.has_session:
        accessible = list(effectively_public)
    elif viewer.can_probe_delegated and platform_restricted:
        granted = await check_delegated_access(
            client, [m.item_id for m in platform_restricted], viewer.delegated_token
        )
        unlocked = [m for m in platform_restricted if m.item_id in granted]
        accessible = unlocked + config_restricted + effectively_public
    else:
        accessible = config_restricted + effectively_public

    login_required = not viewer.has_session and not effectively_public

    logger.info(
        "resolved %d accessible of %d maps (login_required=%s)",
        len(accessible), len(maps), login_required,
        extra={
            "event": "visibility_resolved",
            "accessible": [m.name for m in accessible],
            "effectively_public": len(effectively_public),
            "config_restricted": len(config_restricted),
            "platform_restricted": len(platform_restricted),
            "has_session": viewer.has_session,
            "delegated": viewer.can_probe_delegated,
        },
    )

    return ResolutionResult(
        accessible=accessible,
        public=effectively_public,
        private=private,
        login_required=login_required,
        has_completed=True,
        sharing=sharing,
        configured=maps,
    )
