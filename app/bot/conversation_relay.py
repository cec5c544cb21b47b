"""
Relay between the bridge and the Botpress conversation API.

Each call to ``ConversationRelay.ask`` is a fresh round trip: the caller's
utterance is posted to the conversation named by the session id, then the
newest message of that conversation is read back as the assistant's reply.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from app.config.constants import LOGGER_NAME, NO_REPLY_TEXT
from app.config.settings import Settings
from app.exceptions import RelayError

logger = logging.getLogger(LOGGER_NAME)


def extract_reply_text(data: Any) -> str:
    """
    Pull the reply text out of a ``{messages: [{payload: {...}}]}`` response.

    Prefers ``payload.text``, then ``payload.payload.text``, then
    ``payload.message``; returns the no-reply phrase if none is set.
    """
    messages = data.get("messages") if isinstance(data, dict) else None
    first = messages[0] if isinstance(messages, list) and messages else {}
    payload = first.get("payload") if isinstance(first, dict) else None
    if not isinstance(payload, dict):
        return NO_REPLY_TEXT

    nested = payload.get("payload")
    candidates = (
        payload.get("text"),
        nested.get("text") if isinstance(nested, dict) else None,
        payload.get("message"),
    )
    for candidate in candidates:
        if candidate:
            return str(candidate)
    return NO_REPLY_TEXT


class ConversationRelay:
    """
    Forwards utterances to a Botpress bot and reads back its replies.

    Args:
        settings: Process settings holding the base URL, bot id and token
        transport: Optional httpx transport, used to fake the backend in tests
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    def messages_url(self, session_id: str) -> str:
        """URL of the message collection of one conversation."""
        base = self.settings.backend_base_url.rstrip("/")
        conversation = quote(session_id, safe="")
        return f"{base}/v1/bots/{self.settings.bot_id}/conversations/{conversation}/messages"

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.bot_token}",
            "Content-Type": "application/json",
        }

    async def ask(self, session_id: str, user_text: str) -> str:
        """
        Send ``user_text`` to the conversation and return the assistant's reply.

        Args:
            session_id: Conversation key, usually the Retell call id
            user_text: What the caller said

        Returns:
            The reply text, or the no-reply phrase if the bot said nothing readable

        Raises:
            RelayError: If the backend cannot be reached or answers non-2xx
        """
        url = self.messages_url(session_id)
        try:
            async with httpx.AsyncClient(headers=self.headers, transport=self.transport) as client:
                posted = await client.post(url, json={"type": "text", "payload": {"text": user_text}})
                self._raise_for_status(posted, "post message")

                latest = await client.get(url, params={"limit": 1, "direction": "desc"})
                self._raise_for_status(latest, "read reply")
                data = latest.json()
        except httpx.HTTPError as e:
            raise RelayError(f"Backend unreachable: {e}") from e
        except ValueError as e:
            raise RelayError(f"Backend returned invalid JSON: {e}") from e

        reply = extract_reply_text(data)
        logger.debug(f"Relay reply for session {session_id}: {reply}")
        return reply

    @staticmethod
    def _raise_for_status(response: httpx.Response, step: str) -> None:
        if not response.is_success:
            raise RelayError(
                f"Backend failed to {step}",
                status_code=response.status_code,
                body=response.text,
            )
