"""
Handles the Retell HTTP webhook.

Two deployments of the same webhook exist: one answering with a plain-text body
and one answering with ``{"reply": ...}``. Both verify the optional request
signature, decode the body, extract the turn and relay it.
"""

import json
import logging
from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse, PlainTextResponse

from app.bot.conversation_relay import ConversationRelay
from app.config.constants import (
    APOLOGY_TEXT,
    GREETING_TEXT,
    LOGGER_NAME,
    WEBHOOK_FORMAT_JSON,
    WEBHOOK_FORMAT_TEXT,
)
from app.exceptions import ParseError, SignatureError
from app.handlers.boundary import answer_or_fallback
from app.handlers.extraction import extract_turn
from app.models.message_schemas import WebhookReply
from app.utils.security import verify_signature

logger = logging.getLogger(LOGGER_NAME)


def check_signature(body: bytes, signature: Optional[str], secret: Optional[str]) -> None:
    """
    Reject the request if a signature is present and does not match.

    The check is skipped when no secret is configured or no header was sent.

    Raises:
        SignatureError: On mismatch
    """
    if not secret or not signature:
        return
    if not verify_signature(body, signature, secret):
        logger.warning("Rejected webhook: bad signature")
        raise SignatureError("bad signature")


def decode_envelope(body: bytes) -> Dict[str, Any]:
    """
    Decode a webhook body into a dict.

    Raises:
        ParseError: If the body is not a JSON object
    """
    if not body.strip():
        return {}
    try:
        envelope = json.loads(body)
    except ValueError as e:
        raise ParseError(f"Malformed webhook body: {e}") from e
    if not isinstance(envelope, dict):
        raise ParseError(f"Webhook body is a {type(envelope).__name__}, expected an object")
    return envelope


async def reply_text(body: bytes, relay: ConversationRelay) -> str:
    """Return the text to speak for a webhook body, or "" on a handshake."""
    envelope = decode_envelope(body)
    logger.info(f"Retell webhook keys: {sorted(envelope.keys())}")

    session_id, user_text = extract_turn(envelope)
    if not user_text.strip():
        logger.info(f"Handshake for session {session_id} (no text in payload)")
        return ""

    reply = await relay.ask(session_id, user_text)
    logger.info(f"Reply for session {session_id}: {reply}")
    return reply


async def handle_text_webhook(body: bytes, relay: ConversationRelay) -> PlainTextResponse:
    """Plain-text deployment: greeting on handshake, apology on failure."""

    async def answer() -> PlainTextResponse:
        reply = await reply_text(body, relay)
        return PlainTextResponse(reply or GREETING_TEXT)

    return await answer_or_fallback(
        answer, lambda: PlainTextResponse(APOLOGY_TEXT), "text webhook"
    )


async def handle_json_webhook(body: bytes, relay: ConversationRelay) -> JSONResponse:
    """JSON deployment: ``{"reply": ""}`` on handshake, apology on failure."""

    async def answer() -> JSONResponse:
        reply = await reply_text(body, relay)
        return JSONResponse(WebhookReply(reply=reply).model_dump())

    return await answer_or_fallback(
        answer,
        lambda: JSONResponse(WebhookReply(reply=APOLOGY_TEXT).model_dump()),
        "json webhook",
    )


WEBHOOK_HANDLERS = {
    WEBHOOK_FORMAT_TEXT: handle_text_webhook,
    WEBHOOK_FORMAT_JSON: handle_json_webhook,
}


def webhook_handler(webhook_format: str):
    """Pick the webhook handler for the configured response format."""
    return WEBHOOK_HANDLERS[webhook_format]
