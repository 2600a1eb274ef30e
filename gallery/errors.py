"""
Errors raised by the fox gallery. Per-fetch failures are never raised;
only conditions that make every fetch impossible are.
"""


class GalleryError(Exception):
    """Base class for fox gallery errors."""


class FetcherUnavailableError(GalleryError):
    """The fetch capability is missing, closed or misconfigured."""
