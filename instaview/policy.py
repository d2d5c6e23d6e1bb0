"""
Policy module: decides whether a scrape result carries enough signal to be
worth caching.

The logic is:
- explicit
- keyed on the backend that produced the result
- tolerant of missing or wrongly typed fields
"""

from collections.abc import Mapping

from .results import METHOD_BROWSER, METHOD_HTTP
from .utils import as_int


def _non_empty_list(value) -> bool:
    return isinstance(value, list) and len(value) > 0


def is_valid(result) -> bool:
    if not isinstance(result, Mapping):
        return False

    # Backends that report success explicitly are trusted as-is
    if result.get("success") is True:
        return True

    method = result.get("method")

    if method == METHOD_BROWSER:
        return (
            as_int(result.get("media_items_found")) > 0
            or _non_empty_list(result.get("media_items"))
        )

    if method == METHOD_HTTP:
        return (
            as_int(result.get("forms_found")) > 0
            or as_int(result.get("inputs_found")) > 0
            or _non_empty_list(result.get("sample_images"))
        )

    return False
