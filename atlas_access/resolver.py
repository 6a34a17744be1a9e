"""
Reactive wrapper around resolve_visibility with a last-write-wins guard.
"""

import logging
from typing import Hashable, List, Optional, Tuple

from atlas_access.engine import resolve_visibility
from atlas_access.models import MapConfig, ResolutionResult, Viewer
from atlas_access.platform import PlatformClient

logger = logging.getLogger(__name__)


def snapshot_key(maps: List[MapConfig], viewer: Viewer) -> Tuple[Hashable, ...]:
    """Identity of a pass's inputs; token presence matters, not its value."""
    return (
        tuple(maps or ()),
        viewer.has_session,
        viewer.linked_platform_username,
        bool(viewer.delegated_token),
    )


class VisibilityResolver:
    """Holds the committed result for the embedding application.

    Call :meth:`update` whenever the map list or the viewer changes. Each
    call starts a new pass; only the most recently started pass may
    commit. Older passes run to completion and are dropped.
    """

    def __init__(self, client: PlatformClient):
        self._client = client
        self._generation = 0
        self._current_key: Optional[Tuple[Hashable, ...]] = None
        self._committed_key: Optional[Tuple[Hashable, ...]] = None
        self.result = ResolutionResult()

    @property
    def has_completed(self) -> bool:
        """True once a pass for the current inputs has committed."""
        return self._current_key is not None and self._committed_key == self._current_key

    @property
    def loading(self) -> bool:
        return not self.has_completed

    async def update(self, maps: List[MapConfig], viewer: Viewer) -> Optional[ResolutionResult]:
        """Run a pass for these inputs; return its result, or None if superseded."""
        maps = list(maps or [])
        self._generation += 1
        generation = self._generation
        key = snapshot_key(maps, viewer)
        self._current_key = key

        result = await resolve_visibility(maps, viewer, self._client)

        if generation != self._generation:
            logger.debug(
                "discarding superseded pass %d (current %d)", generation, self._generation,
                extra={"event": "stale_pass_discarded", "generation": generation},
            )
            return None

        self.result = result
        self._committed_key = key
        return result
