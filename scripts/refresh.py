"""Refresh the content cache from the command line.

Usage:
    python -m scripts.refresh           # Load the cache, refresh it if stale
    python -m scripts.refresh --force   # Fetch from the API and overwrite the cache
"""

import asyncio
import logging
import sys

from portfolio.config import get_settings
from portfolio.errors import ContentError
from portfolio.services.freshness import FreshnessController
from portfolio.services.http_client import close_shared_client
from portfolio.services.snapshot_store import SnapshotStore
from portfolio.services.upstream import fetch_all

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


async def _force_refresh(store: SnapshotStore) -> None:
    """Fetch fresh content and overwrite the cache regardless of its state."""
    settings = get_settings()
    snapshot = await fetch_all(settings.blog_api, settings.blog_api_token)
    store.save(snapshot)


async def main() -> int:
    settings = get_settings()
    force = "--force" in sys.argv
    store = SnapshotStore(settings.cache_file)

    try:
        if force:
            print("Force mode: fetching from API...")
            await _force_refresh(store)
        else:
            print("Checking cache against API...")
            controller = FreshnessController(
                store, endpoint=settings.blog_api, auth_token=settings.blog_api_token
            )
            await controller.ensure_data()
    except ContentError as e:
        print(f"ERROR: refresh failed: {e}")
        return 1
    finally:
        await close_shared_client()

    snapshot = store.load()
    print("\nRefresh complete:")
    print(f"  Cache:     {store.path}")
    print(f"  Projects:  {len(snapshot.projects)}")
    print(f"  Recent:    {len(snapshot.posts.recent)}")
    print(f"  Featured:  {len(snapshot.posts.featured)}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
