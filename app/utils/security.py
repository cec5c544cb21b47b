"""
Webhook signing / verification helpers.

Retell signs the raw request body with HMAC-SHA256 keyed by the shared secret
and sends the hex digest in the ``x-retell-signature`` header.

Provides:
 - sign_payload(payload, secret) -> signature (hex)
 - verify_signature(payload, signature, secret) -> bool
"""

import hashlib
import hmac
from typing import Union


def sign_payload(payload: Union[bytes, str], secret: str) -> str:
    """
    Return hex HMAC-SHA256 signature for payload.
    """
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def verify_signature(payload: Union[bytes, str], signature: str, secret: str) -> bool:
    """
    Verify signature (hex string) for payload. Uses constant-time compare.
    """
    expected = sign_payload(payload, secret)
    # Header values may carry any latin-1 text, compare as bytes
    received = signature.strip().lower().encode("utf-8", "surrogateescape")
    return hmac.compare_digest(expected.encode("ascii"), received)
