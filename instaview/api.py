"""
Module-level entry points.

Each call builds an Instaview client from the current configuration
(instaview.yaml, INSTAVIEW_CACHE_DIR, ...). The synchronous helpers run
their own event loop and cannot be called from inside a running one; use
Instaview.get there instead.
"""

import asyncio

from . import __version__
from .client import Instaview
from .orchestrator import Backend
from .results import ScrapeResult
from .utils import require_username

DEFAULT_TTL_HOURS = 12


def get_data(username: str) -> ScrapeResult:
    require_username(username)
    return asyncio.run(Instaview().get(username, ttl_hours=DEFAULT_TTL_HOURS))


def fetch_async(username: str, backend: Backend | str = Backend.BROWSER) -> asyncio.Task:
    require_username(username)
    return Instaview().fetch_async(username, backend)


def get_from_cache_or_fetch(
    username: str,
    ttl_hours: float = DEFAULT_TTL_HOURS,
    backend: Backend | str = Backend.BROWSER,
) -> ScrapeResult:
    require_username(username)
    return asyncio.run(Instaview().get(username, ttl_hours=ttl_hours, backend=backend))


def load_from_cache_only(username: str, ttl_hours: float = DEFAULT_TTL_HOURS) -> ScrapeResult | None:
    require_username(username)
    return Instaview().get_cached(username, ttl_hours=ttl_hours)


def connectivity_report() -> dict:
    return {
        "name": "instaview",
        "version": __version__,
        "methods_available": [
            "get_data",
            "fetch_async",
            "get_from_cache_or_fetch",
            "load_from_cache_only",
            "connectivity_report",
            "scrape_via_browser",
            "scrape_via_http",
        ],
        "backends": [b.value for b in Backend],
        "status": "OK",
    }
