import logging

import aiohttp

from .errors import ScrapeError
from .parsing import probe_page_signals
from .results import ProbeResult, ScrapeResult
from .settings import ProxySettings, ScrapeConfig
from .utils import require_username

log = logging.getLogger(__name__)

DEFAULT_HTTP_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Connection": "keep-alive",
}


class HttpScraper:
    """
    Lightweight unauthenticated probe built on aiohttp.

    - Fetches the StoriesIG homepage only; no form submission
    - Reports page structure (forms, inputs, sample images)
    - Supports proxy usage
    """
    name = "http"

    def __init__(self, session: aiohttp.ClientSession, config: ScrapeConfig, proxy: ProxySettings | None = None):
        self.session = session
        self.config = config
        self.proxy = proxy

    async def scrape(self, username: str) -> ScrapeResult:
        """
        Probe the mirror site for the given username.

        Raises:
            InvalidUsernameError if username is blank.
            ScrapeError on transport errors, HTTP errors or an empty body.
        """
        require_username(username)

        proxy_url = self.proxy.url if (self.proxy and self.config.use_proxy) else None
        headers = {**DEFAULT_HTTP_HEADERS, "User-Agent": self.config.user_agent}
        timeout = aiohttp.ClientTimeout(total=self.config.http_total_timeout_s)

        try:
            async with self.session.get(
                self.config.storiesig_url, proxy=proxy_url, headers=headers,
                timeout=timeout, allow_redirects=True,
            ) as resp:
                if resp.status >= 400:
                    raise ScrapeError(f"HTTP probe got status {resp.status} from {self.config.storiesig_url}")
                html = await resp.text()
        except ScrapeError:
            raise
        except Exception as e:
            raise ScrapeError(f"HTTP scraping failed: {type(e).__name__}: {e}") from e

        if not html.strip():
            raise ScrapeError("HTTP probe returned empty content")

        forms, inputs, images = probe_page_signals(html, self.config.max_sample_images)
        log.debug("HTTP probe for %r: %d forms, %d inputs, %d images", username, forms, inputs, len(images))

        return ProbeResult(
            username=username,
            forms_found=forms,
            inputs_found=inputs,
            sample_images=images,
        ).as_dict()


async def scrape_via_http(username: str, config: ScrapeConfig, proxy: ProxySettings | None = None) -> ScrapeResult:
    require_username(username)
    async with aiohttp.ClientSession() as session:
        return await HttpScraper(session, config, proxy).scrape(username)
