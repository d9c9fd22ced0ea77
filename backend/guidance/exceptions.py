"""Error taxonomy shared by the persistence layer, the Gemini client and the routers."""
from typing import Optional


class GuidanceError(Exception):
    """Base error of the guidance backend."""
    pass


class InvalidRequest(GuidanceError):
    """Caller-supplied data fails a precondition (e.g. missing prompt)."""
    pass


class StorageError(GuidanceError):
    """Store unreachable, constraint violation or malformed query."""
    pass


class UpstreamError(GuidanceError):
    """The generative-language API returned a non-success status or was unreachable.

    `status_code` and `body` are for server-side logs only.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
