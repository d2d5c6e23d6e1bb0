from dataclasses import dataclass

from bs4 import BeautifulSoup

from .results import MediaItem

MEDIA_ITEM_SELECTOR = "li.profile-media-list__item"
DOWNLOAD_BUTTON_SELECTOR = "a.button.button--filled.button__download"


@dataclass
class PageAssets:
    images: list[str]
    links: list[str]
    download_links: list[str]


def _text(el) -> str | None:
    return el.get_text().strip() if el is not None else None


def _unique(values) -> list[str]:
    seen: dict[str, None] = {}
    for v in values:
        if v:
            seen.setdefault(v, None)
    return list(seen)


def parse_media_list(html: str) -> list[MediaItem]:
    """Extract StoriesIG media list entries from rendered HTML."""
    soup = BeautifulSoup(html, "html.parser")
    items: list[MediaItem] = []

    for li in soup.select(MEDIA_ITEM_SELECTOR):
        item = MediaItem()

        img = li.select_one(".media-content__image")
        if img is not None:
            item.image_url = img.get("src")
            item.alt_text = img.get("alt")

        item.caption = _text(li.select_one(".media-content__caption"))

        download = li.select_one(DOWNLOAD_BUTTON_SELECTOR)
        if download is not None:
            item.download_url = download.get("href")

        item.likes = _text(li.select_one(".media-content__meta-like"))

        time_el = li.select_one(".media-content__meta-time")
        item.time = _text(time_el)
        if time_el is not None:
            item.time_title = time_el.get("title")

        items.append(item)

    return items


def collect_page_assets(html: str) -> PageAssets:
    soup = BeautifulSoup(html, "html.parser")
    return PageAssets(
        images=_unique(img.get("src") for img in soup.find_all("img")),
        links=_unique(a.get("href") for a in soup.find_all("a")),
        download_links=_unique(a.get("href") for a in soup.select("a.button__download")),
    )


def probe_page_signals(html: str, max_images: int = 3) -> tuple[int, int, list[str]]:
    """
    Count forms and username-like inputs on a page and sample absolute image URLs.

    Returns:
        (forms_found, inputs_found, sample_images)
    """
    soup = BeautifulSoup(html, "html.parser")
    forms = soup.find_all("form")
    inputs = soup.select('input[type="text"], input[name*="user"]')
    images = [
        src for src in (img.get("src") for img in soup.find_all("img"))
        if src and src.startswith("http")
    ]
    return len(forms), len(inputs), images[:max_images]
