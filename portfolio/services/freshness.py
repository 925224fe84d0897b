"""Keeps the held content snapshot in step with the upstream API.

The controller is the only writer of the snapshot. Pages read it through
``current_snapshot()``, which never touches the network. A refresh replaces
the snapshot (and rewrites the cache file) only when the freshly fetched
content differs from what is held; content equality is the sole staleness
signal.
"""

import logging
import threading

from portfolio.errors import CacheIOError, DecodingError
from portfolio.models.content import ContentSnapshot
from portfolio.services.snapshot_store import SnapshotStore
from portfolio.services.upstream import fetch_all

logger = logging.getLogger(__name__)


class FreshnessController:
    """Owns the held snapshot and its load, refresh and persist lifecycle."""

    def __init__(self, store: SnapshotStore, endpoint: str, auth_token: str = "") -> None:
        self._store = store
        self.endpoint = endpoint
        self.auth_token = auth_token
        self._snapshot = ContentSnapshot()
        self._lock = threading.Lock()

    @property
    def store(self) -> SnapshotStore:
        return self._store

    def current_snapshot(self) -> ContentSnapshot:
        """Return the held snapshot (possibly empty) without fetching."""
        with self._lock:
            return self._snapshot

    async def ensure_data(self) -> None:
        """Startup hook: load the cache, or fetch and save when it is unusable.

        A readable cache is installed and then checked against upstream, so
        an outdated cache gets refreshed straight away.

        Raises:
            ContentError: If the fallback fetch, the save, or the follow-up
                refresh fails. Whatever was installed before the failure
                stays in place.
        """
        try:
            snapshot = self._store.load()
        except (CacheIOError, DecodingError) as e:
            logger.warning("Error loading from cache: %s, fetching from API", e)
            snapshot = await fetch_all(self.endpoint, self.auth_token)
            with self._lock:
                self._snapshot = snapshot
                self._store.save(snapshot)
            logger.info(
                "Fetched %d projects and %d recent posts from API",
                len(snapshot.projects),
                len(snapshot.posts.recent),
            )
            return

        logger.info("Loaded data from cache")
        with self._lock:
            self._snapshot = snapshot
        await self.refresh_if_stale()

    async def refresh_if_stale(self) -> bool:
        """Fetch upstream content and persist it if it differs from the held snapshot.

        Returns True if the held snapshot was replaced.

        Raises:
            ContentError: If the fetch fails (held snapshot untouched) or the
                save fails (held snapshot already replaced, file unchanged).
        """
        fresh = await fetch_all(self.endpoint, self.auth_token)

        with self._lock:
            if fresh.same_content(self._snapshot):
                logger.info("No new data found")
                return False
            logger.info("New data found, updating cache")
            self._snapshot = fresh
            self._store.save(fresh)
        return True
