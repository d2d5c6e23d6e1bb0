class InstaviewError(Exception):
    """Base class for errors raised by instaview."""


class InvalidUsernameError(InstaviewError, ValueError):
    """Raised when a username is missing or blank."""


class ScrapeError(InstaviewError):
    """
    A scraping backend failed.

    Raised for browser automation failures (missing search form, navigation
    timeouts) and for HTTP probe failures (transport errors, error statuses,
    empty responses).
    """
