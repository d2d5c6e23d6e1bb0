import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "INSTAVIEW_CONFIG"
CACHE_DIR_ENV_VAR = "INSTAVIEW_CACHE_DIR"
DEBUG_ENV_VAR = "INSTAVIEW_DEBUG"
DEFAULT_CONFIG_FILENAME = "instaview.yaml"


class ProxySettings(BaseModel):
    server: str | None = None
    username: str | None = None
    password: str | None = None

    @property
    def url(self) -> str | None:
        """Proxy URL for aiohttp, with credentials embedded when both are set."""
        if self.server and self.username and self.password:
            parsed = urlparse(self.server)
            hostport = parsed.netloc or f"{parsed.hostname}:{parsed.port}"
            return f"{parsed.scheme}://{self.username}:{self.password}@{hostport}"
        return self.server

    def playwright_options(self) -> dict | None:
        if not self.server:
            return None
        opts = {"server": self.server}
        if self.username and self.password:
            opts["username"] = self.username
            opts["password"] = self.password
        return opts


def load_proxy_from_txt(path: str | Path) -> ProxySettings:
    """
    Load proxy settings from a text file containing a single URL line.

    Relative paths are resolved against the current working directory.
    Missing, empty or malformed files yield an empty ProxySettings.
    """
    p = Path(path).expanduser()

    if not p.exists():
        log.warning("Proxy file not found: %s", p)
        return ProxySettings()

    raw = p.read_text(encoding="utf-8").strip()
    if not raw:
        log.warning("Proxy file is empty: %s", p)
        return ProxySettings()

    lines = [ln.strip().strip('"').strip("'") for ln in raw.splitlines() if ln.strip()]
    line = lines[0]

    parsed = urlparse(line)
    if not parsed.scheme or not parsed.hostname:
        log.warning("Proxy line does not look like a URL: %s", line)
        return ProxySettings()

    server = f"{parsed.scheme}://{parsed.hostname}"
    if parsed.port:
        server += f":{parsed.port}"

    return ProxySettings(
        server=server,
        username=parsed.username,
        password=parsed.password,
    )


@dataclass
class ScrapeConfig:
    """
    Central configuration for fetching and caching.

    Values can be overridden via instaview.yaml (see load_scrape_config).
    """

    # General
    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    storiesig_url: str = "https://storiesig.info/"

    # Browser tuning
    browser_headless: bool = True
    browser_timeout_ms: int = 10_000
    browser_locale: str = "en-US"
    browser_block_heavy: bool = False
    browser_landing_wait_s: float = 2.0
    browser_settle_s: float = 3.0
    browser_retry_settle_s: float = 2.0
    max_all_images: int = 10

    # HTTP probe
    http_total_timeout_s: float = 20.0
    max_sample_images: int = 3

    # Cache
    cache_dir: str | None = None
    cache_ttl_hours: float = 12

    # Debugging
    debug_screenshots: bool = False
    screenshot_dir: str = "/tmp"

    # Proxy
    use_proxy: bool = False
    proxy_file: str | None = None


def default_cache_dir() -> Path:
    env = os.environ.get(CACHE_DIR_ENV_VAR)
    if env:
        return Path(env).expanduser()
    return Path.home() / ".cache" / "instaview"


def resolve_cache_dir(config: ScrapeConfig) -> Path:
    if config.cache_dir:
        return Path(config.cache_dir).expanduser()
    return default_cache_dir()


def load_proxy(config: ScrapeConfig) -> ProxySettings | None:
    if not (config.use_proxy and config.proxy_file):
        return None
    return load_proxy_from_txt(config.proxy_file)


def load_scrape_config(path: str | Path | None = None) -> ScrapeConfig:
    """
    Load ScrapeConfig from YAML if present; otherwise use defaults.

    Lookup order: explicit path, $INSTAVIEW_CONFIG, ./instaview.yaml.
    A non-empty $INSTAVIEW_DEBUG turns on debug screenshots.
    """

    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or Path.cwd() / DEFAULT_CONFIG_FILENAME

    path = Path(path)

    if not path.exists():
        log.debug("[config] YAML not found at %s, using defaults", path)
        return _apply_env(ScrapeConfig())

    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}

    if not isinstance(data, dict):
        log.warning("[config] Expected mapping in %s, got %s, using defaults", path, type(data))
        return _apply_env(ScrapeConfig())

    allowed_keys = {f.name for f in fields(ScrapeConfig)}
    filtered = {k: v for k, v in data.items() if k in allowed_keys}

    return _apply_env(ScrapeConfig(**filtered))


def _apply_env(config: ScrapeConfig) -> ScrapeConfig:
    if os.environ.get(DEBUG_ENV_VAR):
        config.debug_screenshots = True
    return config
