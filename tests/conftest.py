import pytest

from instaview.cache import CacheStore
from instaview.results import METHOD_BROWSER, METHOD_HTTP


class FakeBackend:
    """Async stand-in for a scraping backend that records every call."""

    def __init__(self, result=None, exc: Exception | None = None):
        self.result = result
        self.exc = exc
        self.calls: list[str] = []

    async def __call__(self, username, config, proxy=None):
        self.calls.append(username)
        if self.exc is not None:
            raise self.exc
        return dict(self.result, username=username)


def stories_result(**overrides) -> dict:
    """Helper: a browser result with one media item, fields overridable."""
    base = {
        "username": "u1",
        "method": METHOD_BROWSER,
        "page_state": "media_found",
        "media_items_found": 1,
        "media_items": [{"image_url": "https://cdn.example.com/1.jpg", "caption": "hi"}],
        "success": True,
    }
    base.update(overrides)
    return base


def probe_result(**overrides) -> dict:
    base = {
        "username": "u1",
        "method": METHOD_HTTP,
        "forms_found": 1,
        "inputs_found": 1,
        "sample_images": [],
    }
    base.update(overrides)
    return base


@pytest.fixture
def store(tmp_path) -> CacheStore:
    return CacheStore(tmp_path / "cache")


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep the real cache dir, config file and debug flag out of every test."""
    monkeypatch.setenv("INSTAVIEW_CACHE_DIR", str(tmp_path / "env-cache"))
    monkeypatch.delenv("INSTAVIEW_CONFIG", raising=False)
    monkeypatch.delenv("INSTAVIEW_DEBUG", raising=False)
    monkeypatch.chdir(tmp_path)
