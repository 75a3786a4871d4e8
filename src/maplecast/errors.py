"""Error taxonomy for maplecast.

Radar and wind failures are recovered where they happen (fallback and
omission). Only InsufficientDataError is meant to reach callers.
"""

from typing import Optional


class MaplecastError(Exception):
    """Base class for all maplecast errors."""


class NetworkError(MaplecastError):
    """Provider unreachable, timed out, or answered with a non-2xx status.

    Attributes:
        url: URL that was requested
        status_code: HTTP status code, if a response was received
    """

    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MalformedResponseError(MaplecastError):
    """Provider answered but the payload does not have the expected shape."""


class InsufficientDataError(MaplecastError):
    """Resampling was asked to work from zero source samples."""
