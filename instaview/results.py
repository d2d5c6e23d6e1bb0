from dataclasses import asdict, dataclass, field
from typing import Any

# Results travel through the cache and the public API as plain JSON-compatible dicts.
ScrapeResult = dict[str, Any]

METHOD_BROWSER = "selenium_storiesig"
METHOD_HTTP = "simple_http_curl"


@dataclass
class MediaItem:
    """
    One entry of the StoriesIG media list.

    Fields:
        image_url    : src of the preview image.
        alt_text     : alt text of the preview image.
        caption      : Caption text, stripped.
        download_url : Href of the download button.
        likes        : Like counter as displayed (e.g. "1.2k").
        time         : Relative time as displayed (e.g. "3 hours ago").
        time_title   : Absolute timestamp from the time element's title.
    """
    image_url: str | None = None
    alt_text: str | None = None
    caption: str | None = None
    download_url: str | None = None
    likes: str | None = None
    time: str | None = None
    time_title: str | None = None


@dataclass
class StoriesResult:
    """Outcome of a browser session against StoriesIG."""
    username: str
    page_state: str
    media_items: list[MediaItem]
    all_images: list[str] = field(default_factory=list)
    download_links: list[str] = field(default_factory=list)
    error_message: str | None = None
    debug_info: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> ScrapeResult:
        return {
            "username": self.username,
            "method": METHOD_BROWSER,
            "page_state": self.page_state,
            "media_items_found": len(self.media_items),
            "media_items": [asdict(m) for m in self.media_items],
            "all_images": list(self.all_images),
            "download_links": list(self.download_links),
            "error_message": self.error_message,
            "success": len(self.media_items) > 0,
            "debug_info": dict(self.debug_info),
        }


@dataclass
class ProbeResult:
    """Page-structure signals from a plain HTTP fetch of the StoriesIG homepage."""
    username: str
    forms_found: int
    inputs_found: int
    sample_images: list[str]
    message: str = (
        "Simple HTTP probe - shows page structure only. "
        "Use the browser backend for media extraction."
    )

    def as_dict(self) -> ScrapeResult:
        return {
            "username": self.username,
            "method": METHOD_HTTP,
            "forms_found": self.forms_found,
            "inputs_found": self.inputs_found,
            "sample_images": list(self.sample_images),
            "message": self.message,
        }
