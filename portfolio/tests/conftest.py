"""Shared fixtures for portfolio tests."""

import pytest

from portfolio.models.content import ContentSnapshot
from portfolio.tests.factories import make_post, make_project, make_snapshot


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from portfolio.config import get_settings

    get_settings.cache_clear()

    # 2. HTTP client singleton
    import portfolio.services.http_client as http_mod

    http_mod._client = None

    # 3. Shared app state
    from portfolio.main import app

    for attr in ("freshness", "csrf"):
        if hasattr(app.state, attr):
            delattr(app.state, attr)


@pytest.fixture
def mock_settings(monkeypatch, tmp_path):
    """Provide Settings with safe test defaults, read through the environment."""
    from portfolio.config import get_settings

    monkeypatch.setenv("BLOG_URL", "https://blog.test")
    monkeypatch.setenv("BLOG_API", "https://blog.test/api/posts")
    monkeypatch.setenv("BLOG_API_TOKEN", "test-token")
    monkeypatch.setenv("PROJECTS_URL", "https://blog.test/projects")
    monkeypatch.setenv("CACHE_FILE", str(tmp_path / "cache.json"))
    monkeypatch.setenv("SITE_OWNER", "Test Owner")
    for name in ("BLOG_CLIENT_ID", "BLOG_CLIENT_SECRET", "CSRF_TTL_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
def sample_snapshot() -> ContentSnapshot:
    """Three projects, two recent posts, the first of them also featured."""
    p1 = make_post("first-post", featured=True)
    p2 = make_post("second-post")
    return make_snapshot(
        projects=[make_project("Alpha"), make_project("Beta"), make_project("Gamma")],
        recent=[p1, p2],
        featured=[p1],
    )


@pytest.fixture
def app_state(mock_settings):
    """Install a controller and CSRF issuer on the app, as the lifespan hook does."""
    from portfolio.main import app
    from portfolio.services.csrf import CSRFTokenIssuer
    from portfolio.services.freshness import FreshnessController
    from portfolio.services.snapshot_store import SnapshotStore

    controller = FreshnessController(
        SnapshotStore(mock_settings.cache_file),
        endpoint=mock_settings.blog_api,
        auth_token=mock_settings.blog_api_token,
    )
    issuer = CSRFTokenIssuer()
    app.state.freshness = controller
    app.state.csrf = issuer
    return controller, issuer
