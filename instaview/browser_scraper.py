import asyncio
import logging
import time
from pathlib import Path

from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from .errors import ScrapeError
from .parsing import MEDIA_ITEM_SELECTOR, collect_page_assets, parse_media_list
from .results import ScrapeResult, StoriesResult
from .settings import ProxySettings, ScrapeConfig
from .utils import require_username

log = logging.getLogger(__name__)

SEARCH_INPUT_SELECTOR = 'input.search.search-form__input[placeholder*="username"]'
SEARCH_BUTTON_SELECTOR = "button.search-form__button"
ERROR_SELECTORS = (
    ".error",
    ".alert",
    ".warning",
    '[class*="error"]',
    '[class*="not-found"]',
)


class BrowserScraper:
    """
    Headless Chromium session that drives the StoriesIG search form.

    - Uses single browser instance per context manager (__aenter__/__aexit__)
    - Supports proxy authentication
    - Configurable user agent, locale, headless mode, and heavy-resource blocking
    - Optional debug screenshot per scrape
    """

    name = "browser"

    def __init__(self, config: ScrapeConfig, proxy: ProxySettings | None = None):
        self.config = config
        self.proxy = proxy

        self._playwright = None
        self._browser = None
        self._context = None

    async def __aenter__(self):
        self._playwright = await async_playwright().start()

        proxy_dict = None
        if self.proxy and self.config.use_proxy:
            proxy_dict = self.proxy.playwright_options()

        self._browser = await self._playwright.chromium.launch(
            headless=self.config.browser_headless,
            proxy=proxy_dict,
            args=["--no-sandbox", "--disable-dev-shm-usage", "--disable-gpu"],
        )

        self._context = await self._browser.new_context(
            user_agent=self.config.user_agent,
            locale=self.config.browser_locale,
            viewport={"width": 1920, "height": 1080},
        )

        # Media is only read from the DOM, never rendered
        if self.config.browser_block_heavy:
            async def route_handler(route):
                if route.request.resource_type in {"media", "font"}:
                    await route.abort()
                else:
                    await route.continue_()
            await self._context.route("**/*", route_handler)

        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._context:
            await self._context.close()
        if self._browser:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()

    async def scrape(self, username: str) -> ScrapeResult:
        """
        Search StoriesIG for username and extract the media list.

        Raises:
            ScrapeError on navigation failures or when the search form is missing.
        """
        page = await self._context.new_page()
        try:
            return await self._scrape_page(page, username)
        except ScrapeError:
            raise
        except Exception as e:
            raise ScrapeError(f"Browser scraping failed: {type(e).__name__}: {e}") from e
        finally:
            await page.close()

    async def _scrape_page(self, page, username: str) -> ScrapeResult:
        cfg = self.config

        await page.goto(cfg.storiesig_url, timeout=cfg.browser_timeout_ms, wait_until="domcontentloaded")
        await asyncio.sleep(cfg.browser_landing_wait_s)

        try:
            search = await page.wait_for_selector(
                SEARCH_INPUT_SELECTOR, state="visible", timeout=cfg.browser_timeout_ms,
            )
        except PlaywrightTimeoutError as e:
            raise ScrapeError(f"Search input not found with selector: {SEARCH_INPUT_SELECTOR}") from e

        await search.fill(username)

        button = await page.query_selector(SEARCH_BUTTON_SELECTOR)
        if button is not None:
            await button.click()
        else:
            await search.press("Enter")

        await asyncio.sleep(cfg.browser_settle_s)

        error_message = None
        if await page.query_selector_all(MEDIA_ITEM_SELECTOR):
            page_state = "media_found"
        else:
            # Results sometimes render late
            await asyncio.sleep(cfg.browser_retry_settle_s)
            if await page.query_selector_all(MEDIA_ITEM_SELECTOR):
                page_state = "media_found_delayed"
            else:
                error_message = await self._find_error_message(page)
                page_state = "error_found" if error_message is not None else "no_media"

        html = await page.content()
        media = parse_media_list(html)
        assets = collect_page_assets(html)

        result = StoriesResult(
            username=username,
            page_state=page_state,
            media_items=media,
            all_images=[src for src in assets.images if src.startswith("http")][: cfg.max_all_images],
            download_links=assets.download_links,
            error_message=error_message,
            debug_info={
                "total_images": len(assets.images),
                "total_links": len(assets.links),
            },
        )

        if cfg.debug_screenshots:
            shot = Path(cfg.screenshot_dir) / f"instaview_debug_{int(time.time())}.png"
            await page.screenshot(path=str(shot))
            result.debug_info["screenshot_path"] = str(shot)

        log.debug("Browser scrape for %r: %s, %d media items", username, page_state, len(media))
        return result.as_dict()

    async def _find_error_message(self, page) -> str | None:
        for selector in ERROR_SELECTORS:
            elements = await page.query_selector_all(selector)
            if elements:
                return (await elements[0].inner_text()).strip()
        return None


async def scrape_via_browser(username: str, config: ScrapeConfig, proxy: ProxySettings | None = None) -> ScrapeResult:
    require_username(username)
    try:
        async with BrowserScraper(config, proxy) as scraper:
            return await scraper.scrape(username)
    except ScrapeError:
        raise
    except Exception as e:
        # Browser launch failures (missing binary, sandbox issues)
        raise ScrapeError(f"Browser scraping failed: {type(e).__name__}: {e}") from e
