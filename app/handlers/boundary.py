"""
The single error-to-fallback mapping applied at every channel boundary.

Retell expects a well-formed reply no matter what went wrong behind the bridge,
so any failure after the signature check becomes one degraded turn of
conversation instead of a protocol error.
"""

import logging
from typing import Awaitable, Callable, TypeVar

from app.config.constants import LOGGER_NAME
from app.exceptions import BridgeError, RelayError

logger = logging.getLogger(LOGGER_NAME)

T = TypeVar("T")


async def answer_or_fallback(
    answer: Callable[[], Awaitable[T]],
    fallback: Callable[[], T],
    channel: str,
) -> T:
    """
    Run ``answer`` and return its result, or ``fallback()`` if it raises.

    Args:
        answer: Coroutine factory producing the channel response
        fallback: Builds the channel's apology response
        channel: Channel name for log messages

    Returns:
        The channel response
    """
    try:
        return await answer()
    except RelayError as e:
        logger.error(f"{channel}: relay failed: {e}")
    except BridgeError as e:
        logger.error(f"{channel}: {type(e).__name__}: {e}")
    except Exception as e:
        logger.error(f"{channel}: unexpected error: {e}", exc_info=True)
    return fallback()
