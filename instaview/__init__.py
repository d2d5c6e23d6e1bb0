__version__ = "0.1.0"

from .api import (  # noqa: E402
    connectivity_report,
    fetch_async,
    get_data,
    get_from_cache_or_fetch,
    load_from_cache_only,
)
from .browser_scraper import scrape_via_browser  # noqa: E402
from .cache import CacheStore  # noqa: E402
from .client import Instaview  # noqa: E402
from .errors import InstaviewError, InvalidUsernameError, ScrapeError  # noqa: E402
from .http_scraper import scrape_via_http  # noqa: E402
from .orchestrator import Backend, FetchOrchestrator  # noqa: E402
from .policy import is_valid  # noqa: E402

__all__ = [
    "Backend",
    "CacheStore",
    "FetchOrchestrator",
    "Instaview",
    "InstaviewError",
    "InvalidUsernameError",
    "ScrapeError",
    "connectivity_report",
    "fetch_async",
    "get_data",
    "get_from_cache_or_fetch",
    "is_valid",
    "load_from_cache_only",
    "scrape_via_browser",
    "scrape_via_http",
]
