import json
import logging
import os
import tempfile
import time
from collections.abc import Callable
from contextlib import suppress
from datetime import timedelta
from pathlib import Path

from .policy import is_valid
from .results import ScrapeResult
from .utils import sanitize_username

log = logging.getLogger(__name__)


class CacheStore:
    """
    Per-username JSON cache with a lazy, mtime-based TTL.

    What this implementation does:
    - One file per sanitized username: <base_dir>/<sanitized>.json
    - Freshness is decided at read time from the file's mtime
    - Stale files are left in place until the next successful write

    Behavior:
    - Missing, stale, unparsable or unusable files read as None
    - Reads annotate the returned record with cached=True; the flag is never persisted
    - Writes go through a temp file + os.replace so readers never see partial JSON
    """

    def __init__(self, base_dir: str | Path, clock: Callable[[], float] = time.time):
        self.base_dir = Path(base_dir)
        self._clock = clock

    def resolve_path(self, username: str) -> Path:
        return self.base_dir / f"{sanitize_username(username)}.json"

    def read(self, username: str, max_age: timedelta) -> ScrapeResult | None:
        """
        Returns the cached record if present and no older than max_age,
        otherwise None.
        """
        path = self.resolve_path(username)

        try:
            mtime = path.stat().st_mtime
        except FileNotFoundError:
            return None
        except OSError as e:
            log.debug("Cannot stat cache file %s: %s", path, e)
            return None

        age = self._clock() - mtime
        if age > max_age.total_seconds():
            log.debug("Cache for %r is stale (%.0fs old)", username, age)
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            log.debug("Ignoring unreadable cache file %s: %s", path, e)
            return None

        if not is_valid(data):
            log.debug("Ignoring cache file %s: no usable data", path)
            return None

        return {**data, "cached": True}

    def write(self, username: str, result: ScrapeResult) -> Path:
        """
        Persist a result for username and return the file path.
        Raises OSError (or TypeError for non-JSON values) on failure.
        """
        path = self.resolve_path(username)
        payload = {k: v for k, v in result.items() if k != "cached"}

        self.base_dir.mkdir(parents=True, exist_ok=True)

        temp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.base_dir,
                prefix=f".{path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_name = handle.name
                json.dump(payload, handle, ensure_ascii=False, indent=2)
                handle.write("\n")
            os.replace(temp_name, path)
        except BaseException:
            if temp_name:
                with suppress(FileNotFoundError):
                    Path(temp_name).unlink()
            raise

        return path
