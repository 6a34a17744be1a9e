"""
Platform sharing prober – asks the platform, anonymously, whether each
configured map's item is publicly shared.
"""

import asyncio
import logging
from typing import Dict, Iterable, Optional

import httpx

from atlas_access.models import MapConfig, SharingResult
from atlas_access.platform import PlatformClient, PlatformError

logger = logging.getLogger(__name__)


async def check_item_sharing(
    client: PlatformClient, item_id: str, portal_url: Optional[str] = None
) -> SharingResult:
    """Look up one item without credentials. Failures read as not public."""
    if not item_id:
        return SharingResult(is_public=False, error="No item ID provided")

    try:
        item = await client.fetch_item(item_id, portal_url=portal_url)
    except PlatformError as e:
        # Private or deleted items answer with an error payload.
        return SharingResult(is_public=False, error=e.message)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(
            "sharing lookup failed for %s: %s", item_id, e,
            extra={"event": "sharing_probe_failed", "item_id": item_id},
        )
        return SharingResult(is_public=False, error=str(e) or type(e).__name__)

    access = item.get("access")
    return SharingResult(is_public=access == "public", access=access)


async def check_multiple_sharing(
    client: PlatformClient, maps: Iterable[MapConfig]
) -> Dict[str, SharingResult]:
    """Probe every map that has an item id; maps without one are skipped."""
    targets: Dict[str, Optional[str]] = {}
    for m in maps:
        if not m.item_id:
            continue
        if m.item_id not in targets:
            targets[m.item_id] = m.portal_url
        elif targets[m.item_id] != m.portal_url:
            logger.debug(
                "item %s listed on several portals; probing %s", m.item_id, targets[m.item_id],
                extra={"event": "sharing_portal_conflict", "item_id": m.item_id},
            )

    async def _probe(item_id: str, portal_url: Optional[str]) -> SharingResult:
        try:
            return await check_item_sharing(client, item_id, portal_url)
        except Exception as e:
            logger.warning(
                "unexpected sharing probe error for %s: %s", item_id, e,
                extra={"event": "sharing_probe_failed", "item_id": item_id},
            )
            return SharingResult(is_public=False, error=str(e) or type(e).__name__)

    item_ids = list(targets)
    results = await asyncio.gather(*(_probe(i, targets[i]) for i in item_ids))

    logger.debug(
        "sharing probe finished: %d items, %d public",
        len(item_ids), sum(1 for r in results if r.is_public),
        extra={"event": "sharing_probe_done"},
    )
    return dict(zip(item_ids, results))
