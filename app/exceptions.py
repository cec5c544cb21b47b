"""
Error taxonomy for the bridge.

Only ``SignatureError`` ever reaches the calling platform as a protocol-level
error (HTTP 401). Everything else is turned into a spoken fallback reply at the
channel boundary, see ``app.handlers.boundary``.
"""

from typing import Optional


class BridgeError(Exception):
    """Base class for errors raised while handling a Retell event."""


class SignatureError(BridgeError):
    """The x-retell-signature header does not match the request body."""


class ParseError(BridgeError):
    """The inbound message is not a JSON object."""


class RelayError(BridgeError):
    """The conversational backend was unreachable or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is None:
            return base
        return f"{base} (status={self.status_code}, body={self.body[:200]})"
