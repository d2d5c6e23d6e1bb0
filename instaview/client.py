import asyncio
import logging
from collections.abc import Mapping
from datetime import timedelta

from .cache import CacheStore
from .orchestrator import Backend, BackendFn, FetchOrchestrator
from .results import ScrapeResult
from .settings import ProxySettings, ScrapeConfig, load_proxy, load_scrape_config, resolve_cache_dir
from .utils import require_username

log = logging.getLogger(__name__)


class Instaview:
    """
    Cache-or-fetch front door.

    A fresh cache entry is returned as-is (annotated cached=True) without
    touching the network. Anything else triggers a fetch through the
    orchestrator, whose result is returned unannotated.

    There is no serve-stale fallback: if the fetch fails, the error reaches
    the caller even when an expired cache file is still on disk.
    """

    def __init__(
        self,
        config: ScrapeConfig | None = None,
        store: CacheStore | None = None,
        backends: Mapping[Backend, BackendFn] | None = None,
        proxy: ProxySettings | None = None,
    ):
        self.config = config or load_scrape_config()
        self.store = store or CacheStore(resolve_cache_dir(self.config))
        if proxy is None:
            proxy = load_proxy(self.config)
        self.orchestrator = FetchOrchestrator(self.store, self.config, backends, proxy)

    def _max_age(self, ttl_hours: float | None) -> timedelta:
        return timedelta(hours=self.config.cache_ttl_hours if ttl_hours is None else ttl_hours)

    def fetch_async(self, username: str, backend: Backend | str | None = Backend.BROWSER) -> asyncio.Task:
        return self.orchestrator.fetch_async(username, backend)

    def get_cached(self, username: str, ttl_hours: float | None = None) -> ScrapeResult | None:
        require_username(username)
        return self.store.read(username, self._max_age(ttl_hours))

    async def get(
        self,
        username: str,
        ttl_hours: float | None = None,
        backend: Backend | str | None = Backend.BROWSER,
    ) -> ScrapeResult:
        require_username(username)

        cached = self.store.read(username, self._max_age(ttl_hours))
        if cached is not None:
            log.debug("Cache hit for %r", username)
            return cached

        log.debug("Cache miss for %r", username)
        return await self.fetch_async(username, backend)
