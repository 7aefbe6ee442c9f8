# ABOUTME: Exception definitions for authority and search client errors.
# ABOUTME: Defines error types raised by AuthorityClient and SearchClient.


class TransportError(Exception):
    """Raised when a remote call fails at the transport level or returns non-2xx"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFound(Exception):
    """Raised when start-game performer ids do not resolve"""

    def __init__(self, message: str, performer_ids: tuple[int, ...] = ()):
        super().__init__(message)
        self.performer_ids = performer_ids
