"""
Handles Retell WebSocket streaming messages.

Every inbound frame carries the full call transcript. The newest user turn is
relayed to the bot and the reply is sent back as one complete response chunk
echoing the frame's ``response_id``.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from app.bot.conversation_relay import ConversationRelay
from app.config.constants import (
    APOLOGY_TEXT,
    GREETING_TEXT,
    INTERACTION_UPDATE_ONLY,
    LOGGER_NAME,
)
from app.exceptions import ParseError
from app.handlers.boundary import answer_or_fallback
from app.handlers.extraction import extract_session_id, latest_user_utterance
from app.models.message_schemas import RetellStreamRequest, RetellStreamResponse

logger = logging.getLogger(LOGGER_NAME)


def parse_stream_message(data: str) -> RetellStreamRequest:
    """
    Decode one WebSocket text frame.

    Raises:
        ParseError: If the frame is not a JSON object of the expected shape
    """
    try:
        message = json.loads(data)
    except ValueError as e:
        raise ParseError(f"Malformed WebSocket frame: {e}") from e
    if not isinstance(message, dict):
        raise ParseError(f"WebSocket frame is a {type(message).__name__}, expected an object")
    try:
        return RetellStreamRequest(**message)
    except ValidationError as e:
        raise ParseError(f"Invalid WebSocket frame: {e}") from e


async def respond_to_request(
    request: RetellStreamRequest, relay: ConversationRelay
) -> RetellStreamResponse:
    """Build the reply envelope for a parsed request."""
    user_text = latest_user_utterance(request.transcript)
    if not user_text:
        logger.info(f"Greeting on response_id {request.response_id} (no user turn yet)")
        return RetellStreamResponse(response_id=request.response_id, content=GREETING_TEXT)

    session_id = extract_session_id(request.model_dump())
    content = await relay.ask(session_id, user_text)
    logger.info(f"Reply for session {session_id} on response_id {request.response_id}: {content}")
    return RetellStreamResponse(response_id=request.response_id, content=content)


async def handle_stream_message(
    data: str, relay: ConversationRelay
) -> Optional[RetellStreamResponse]:
    """
    Handle one inbound frame.

    Args:
        data: Raw text frame
        relay: Relay to the conversational backend

    Returns:
        The envelope to send, or None for partial ``update_only`` frames
    """

    async def answer() -> Optional[RetellStreamResponse]:
        request = parse_stream_message(data)
        if request.interaction_type == INTERACTION_UPDATE_ONLY:
            logger.debug(f"Ignoring update_only frame (response_id {request.response_id})")
            return None
        return await respond_to_request(request, relay)

    return await answer_or_fallback(
        answer,
        lambda: RetellStreamResponse(response_id=0, content=APOLOGY_TEXT),
        "websocket",
    )
