import logging
from pathlib import Path

import pandas as pd

from .results import ScrapeResult

log = logging.getLogger(__name__)


def result_frame(result: ScrapeResult) -> pd.DataFrame:
    """
    Flatten a scrape result into one row per media item.

    Browser results yield their media_items; HTTP probes yield their
    sample_images. The username is repeated on every row.
    """
    rows = result.get("media_items")
    if not isinstance(rows, list) or not rows:
        images = result.get("sample_images") or []
        rows = [{"image_url": src} for src in images]

    df = pd.DataFrame([r for r in rows if isinstance(r, dict)])
    if not df.empty:
        df.insert(0, "username", result.get("username"))
    return df


def save_media_csv(result: ScrapeResult, path: str | Path) -> Path | None:
    """
    Persist a result's media rows as CSV.

    Returns the written path, or None when there was nothing to write.
    """
    df = result_frame(result)
    if df.empty:
        return None

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False)
    log.info("Saved %s", out_path)
    return out_path
