"""
Fetch orchestration: run a scraping backend as an asyncio task and cache
what it finds.

Validation happens before the task is scheduled; classification and the
cache write happen inside the task, after the backend returns.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from enum import Enum

from .browser_scraper import scrape_via_browser
from .cache import CacheStore
from .http_scraper import scrape_via_http
from .policy import is_valid
from .results import ScrapeResult
from .settings import ProxySettings, ScrapeConfig
from .utils import require_username

log = logging.getLogger(__name__)

BackendFn = Callable[[str, ScrapeConfig, ProxySettings | None], Awaitable[ScrapeResult]]


class Backend(str, Enum):
    BROWSER = "browser"
    HTTP = "http"

    @classmethod
    def parse(cls, value: "Backend | str | None") -> "Backend":
        """Unknown or missing choices fall back to the browser backend."""
        if isinstance(value, cls):
            return value
        key = (value or "").strip().lower() if isinstance(value, str) else ""
        # Legacy aliases
        key = {"selenium": "browser", "simple_http": "http"}.get(key, key)
        try:
            return cls(key)
        except ValueError:
            log.warning("Unknown backend %r, falling back to %s", value, cls.BROWSER.value)
            return cls.BROWSER


DEFAULT_BACKENDS: dict[Backend, BackendFn] = {
    Backend.BROWSER: scrape_via_browser,
    Backend.HTTP: scrape_via_http,
}


class FetchOrchestrator:
    def __init__(
        self,
        store: CacheStore,
        config: ScrapeConfig,
        backends: Mapping[Backend, BackendFn] | None = None,
        proxy: ProxySettings | None = None,
    ):
        self.store = store
        self.config = config
        self.backends = dict(DEFAULT_BACKENDS if backends is None else backends)
        self.proxy = proxy

    def fetch_async(self, username: str, backend: Backend | str | None = Backend.BROWSER) -> asyncio.Task:
        """
        Start a background fetch for username.

        Must be called with a running event loop. Awaiting the returned task
        yields the ScrapeResult or re-raises the backend's exception.

        Raises:
            InvalidUsernameError immediately for blank usernames.
        """
        require_username(username)
        choice = Backend.parse(backend)
        return asyncio.get_running_loop().create_task(
            self._run(username, choice),
            name=f"instaview-fetch-{choice.value}-{username}",
        )

    async def _run(self, username: str, backend: Backend) -> ScrapeResult:
        fn = self.backends.get(backend) or self.backends[Backend.BROWSER]
        log.info("Fetching %r via %s backend", username, backend.value)

        result = await fn(username, self.config, self.proxy)

        if is_valid(result):
            try:
                path = self.store.write(username, result)
                log.debug("Cached %r at %s", username, path)
            except (OSError, TypeError, ValueError) as e:
                log.warning("Failed to cache result for %r: %s", username, e)
        else:
            log.info("No usable data for %r via %s backend, not caching", username, backend.value)

        return result
