"""
Delegated-access prober – checks which restricted items the holder of a
delegated platform token may open.
"""

import asyncio
import logging
from typing import Iterable, Optional, Set

import httpx

from atlas_access.platform import PlatformClient, PlatformError

logger = logging.getLogger(__name__)


async def _can_access(client: PlatformClient, item_id: str, token: str) -> bool:
    try:
        await client.fetch_item(item_id, token=token)
    except PlatformError as e:
        logger.debug(
            "delegated access denied for %s: %s", item_id, e.message,
            extra={"event": "delegated_denied", "item_id": item_id, "code": e.code},
        )
        return False
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(
            "delegated lookup failed for %s: %s", item_id, e,
            extra={"event": "delegated_probe_failed", "item_id": item_id},
        )
        return False
    return True


async def check_delegated_access(
    client: PlatformClient, item_ids: Iterable[str], token: Optional[str]
) -> Set[str]:
    """Return the subset of *item_ids* the token holder can access.

    No token means no network call and an empty set. Any failure denies.
    """
    if not token:
        return set()

    ids = list(dict.fromkeys(i for i in item_ids if i))
    if not ids:
        return set()

    try:
        allowed = await asyncio.gather(*(_can_access(client, i, token) for i in ids))
    except Exception as e:
        logger.warning(
            "delegated access check aborted: %s", e,
            extra={"event": "delegated_probe_failed"},
        )
        return set()

    accessible = {i for i, ok in zip(ids, allowed) if ok}
    logger.debug(
        "delegated probe finished: %d of %d accessible", len(accessible), len(ids),
        extra={"event": "delegated_probe_done"},
    )
    return accessible
