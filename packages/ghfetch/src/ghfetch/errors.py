"""Content fetcher exceptions.

HTTP and filesystem failures are not wrapped: ``httpx`` and ``OSError``
exceptions reach the caller unchanged.
"""


class GhFetchError(Exception):
    """Base exception for the content fetcher."""


class MissingTokenError(GhFetchError):
    """No GitHub token could be resolved."""


class UnsupportedContentError(GhFetchError):
    """Contents API returned neither a directory listing nor a file."""
