"""Tests for FreshnessController — startup load, equality-gated refresh, failures."""

import asyncio
import os
from unittest.mock import AsyncMock

import httpx
import pytest

from portfolio.errors import CacheIOError, HTTPStatusError, NetworkError
from portfolio.models.content import ContentFeed, ContentSnapshot
from portfolio.services.freshness import FreshnessController
from portfolio.services.snapshot_store import SnapshotStore
from portfolio.tests.factories import make_post, make_project, make_snapshot

ENDPOINT = "https://blog.test/api/posts"


@pytest.fixture
def store(tmp_path) -> SnapshotStore:
    return SnapshotStore(tmp_path / "cache.json")


@pytest.fixture
def controller(store) -> FreshnessController:
    return FreshnessController(store, endpoint=ENDPOINT, auth_token="tok")


def _mock_fetch_all(mocker, **kwargs) -> AsyncMock:
    return mocker.patch(
        "portfolio.services.freshness.fetch_all", new_callable=AsyncMock, **kwargs
    )


def _with_post_change(snapshot: ContentSnapshot) -> ContentSnapshot:
    """Same snapshot with one field of the first recent post changed."""
    first = snapshot.posts.recent[0].model_copy(update={"title": "Edited title"})
    return make_snapshot(
        projects=snapshot.projects,
        recent=[first, *snapshot.posts.recent[1:]],
        featured=snapshot.posts.featured,
    )


def test_initial_snapshot_is_empty(controller):
    assert controller.current_snapshot().same_content(ContentSnapshot())


class TestEnsureData:
    """Tests for ensure_data()."""

    async def test_fresh_start_fetches_and_writes_cache(
        self, controller, store, mocker, sample_snapshot
    ):
        mock_fetch = _mock_fetch_all(mocker, return_value=sample_snapshot)

        await controller.ensure_data()

        mock_fetch.assert_awaited_once_with(ENDPOINT, "tok")
        current = controller.current_snapshot()
        assert current.same_content(sample_snapshot)
        assert [p.title for p in current.projects] == ["Alpha", "Beta", "Gamma"]
        assert [p.slug for p in current.posts.recent] == ["first-post", "second-post"]
        assert [p.slug for p in current.posts.featured] == ["first-post"]
        # Cache file decodes back to the same structure
        assert store.load().same_content(sample_snapshot)

    async def test_corrupt_cache_falls_back_to_fetch(
        self, controller, store, mocker, sample_snapshot
    ):
        store.path.write_text('{"projects": [{"title": ')
        _mock_fetch_all(mocker, return_value=sample_snapshot)

        await controller.ensure_data()

        assert controller.current_snapshot().same_content(sample_snapshot)
        assert store.load().same_content(sample_snapshot)

    async def test_valid_cache_is_loaded_then_refreshed(
        self, controller, store, mocker, sample_snapshot
    ):
        store.save(sample_snapshot)
        mock_fetch = _mock_fetch_all(mocker, return_value=sample_snapshot)
        save_spy = mocker.spy(store, "save")

        await controller.ensure_data()

        mock_fetch.assert_awaited_once()
        save_spy.assert_not_called()
        assert controller.current_snapshot().same_content(sample_snapshot)

    async def test_outdated_cache_is_replaced(
        self, controller, store, mocker, sample_snapshot
    ):
        store.save(sample_snapshot)
        newer = _with_post_change(sample_snapshot)
        _mock_fetch_all(mocker, return_value=newer)

        await controller.ensure_data()

        assert controller.current_snapshot().same_content(newer)
        assert store.load().same_content(newer)

    async def test_fetch_failure_without_cache_propagates(
        self, controller, store, mocker
    ):
        _mock_fetch_all(mocker, side_effect=NetworkError("down"))

        with pytest.raises(NetworkError):
            await controller.ensure_data()

        assert controller.current_snapshot().is_empty
        assert not store.path.exists()

    async def test_refresh_failure_keeps_cached_snapshot(
        self, controller, store, mocker, sample_snapshot
    ):
        store.save(sample_snapshot)
        _mock_fetch_all(mocker, side_effect=HTTPStatusError(500, ENDPOINT))

        with pytest.raises(HTTPStatusError):
            await controller.ensure_data()

        assert controller.current_snapshot().same_content(sample_snapshot)
        assert store.load().same_content(sample_snapshot)


class TestRefreshIfStale:
    """Tests for refresh_if_stale()."""

    async def test_identical_data_writes_cache_only_once(
        self, controller, store, mocker, sample_snapshot
    ):
        _mock_fetch_all(mocker, return_value=sample_snapshot)
        save_spy = mocker.spy(store, "save")

        assert await controller.refresh_if_stale() is True
        first_bytes = store.path.read_bytes()
        first_mtime = os.stat(store.path).st_mtime_ns

        assert await controller.refresh_if_stale() is False

        save_spy.assert_called_once()
        assert store.path.read_bytes() == first_bytes
        assert os.stat(store.path).st_mtime_ns == first_mtime

    async def test_changed_post_saves_exactly_once(
        self, controller, store, mocker, sample_snapshot
    ):
        _mock_fetch_all(mocker, return_value=sample_snapshot)
        await controller.refresh_if_stale()

        changed = _with_post_change(sample_snapshot)
        _mock_fetch_all(mocker, return_value=changed)
        save_spy = mocker.spy(store, "save")

        assert await controller.refresh_if_stale() is True

        save_spy.assert_called_once_with(changed)
        assert controller.current_snapshot().same_content(changed)
        assert store.load().same_content(changed)

    async def test_fetch_failure_leaves_snapshot_and_file(
        self, controller, store, mocker, sample_snapshot
    ):
        _mock_fetch_all(mocker, return_value=sample_snapshot)
        await controller.refresh_if_stale()
        before = store.path.read_bytes()

        _mock_fetch_all(mocker, side_effect=NetworkError("down"))
        with pytest.raises(NetworkError):
            await controller.refresh_if_stale()

        assert controller.current_snapshot() is not None
        assert controller.current_snapshot().same_content(sample_snapshot)
        assert store.path.read_bytes() == before

    @pytest.mark.parametrize("failing", ["posts", "projects"])
    async def test_partial_upstream_failure_does_not_mutate(
        self, controller, store, mocker, monkeypatch, sample_snapshot, failing
    ):
        """A failure of either sub-fetch leaves the held snapshot untouched."""
        _mock_fetch_all(mocker, return_value=sample_snapshot)
        await controller.refresh_if_stale()
        mocker.stopall()

        if failing == "posts":

            async def mock_get(self, url, **kwargs):
                return httpx.Response(503)

            monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
        else:

            async def mock_get(self, url, **kwargs):
                return httpx.Response(
                    200,
                    json={"recent": [make_post("brand-new").model_dump()], "featured": []},
                )

            monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)
            mocker.patch(
                "portfolio.services.upstream.fetch_projects",
                side_effect=NetworkError("catalog unavailable"),
            )
        save_spy = mocker.spy(store, "save")

        with pytest.raises((HTTPStatusError, NetworkError)):
            await controller.refresh_if_stale()

        save_spy.assert_not_called()
        assert controller.current_snapshot().same_content(sample_snapshot)

    async def test_save_failure_is_reported(
        self, controller, store, mocker, sample_snapshot
    ):
        _mock_fetch_all(mocker, return_value=sample_snapshot)
        mocker.patch.object(store, "save", side_effect=CacheIOError("disk full"))

        with pytest.raises(CacheIOError):
            await controller.refresh_if_stale()

        # In-memory content still moves forward; only the file is unchanged
        assert controller.current_snapshot().same_content(sample_snapshot)
        assert not store.path.exists()

    async def test_concurrent_refreshes_persist_once(
        self, controller, store, mocker, sample_snapshot
    ):
        _mock_fetch_all(mocker, return_value=sample_snapshot)
        save_spy = mocker.spy(store, "save")

        results = await asyncio.gather(*(controller.refresh_if_stale() for _ in range(5)))

        assert results.count(True) == 1
        save_spy.assert_called_once()

    async def test_reader_sees_whole_snapshots_only(
        self, controller, mocker, sample_snapshot
    ):
        replacement = make_snapshot(
            projects=[make_project("Delta")],
            recent=[make_post("other")],
            featured=[],
        )
        _mock_fetch_all(mocker, return_value=replacement)
        held = controller.current_snapshot()

        await controller.refresh_if_stale()

        # The earlier reference is unaffected by the replacement
        assert held.is_empty
        assert controller.current_snapshot().same_content(replacement)
        assert controller.current_snapshot().posts == ContentFeed(
            recent=[make_post("other")]
        )
