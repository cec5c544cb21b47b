"""
WebSocket client that plays Retell's side of the streaming protocol.

Used to exercise a running bridge by hand: it sends transcript frames the way
Retell does and reads back the reply envelopes.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import websockets

from app.config.constants import INTERACTION_UPDATE_ONLY, LOGGER_NAME, USER_ROLE
from app.models.message_schemas import RetellStreamResponse

logger = logging.getLogger(LOGGER_NAME)


class RetellClient:
    """
    Client for talking to the bridge's /retell WebSocket like Retell would.

    The client keeps the running transcript so each frame carries the whole
    conversation, as Retell's frames do.
    """

    def __init__(self, url: str, session_id: Optional[str] = None):
        """
        Initialize the client.

        Args:
            url: The bridge WebSocket URL, e.g. ws://localhost:8000/retell
            session_id: Optional session id sent with every frame
        """
        self.url = url
        self.session_id = session_id
        self.websocket = None
        self.transcript: List[Dict[str, str]] = []

    async def connect(self) -> bool:
        """
        Connect to the bridge.

        Returns:
            True if connection was successful, False otherwise
        """
        try:
            self.websocket = await websockets.connect(self.url)
            logger.info(f"Connected to bridge WebSocket at {self.url}")
            return True
        except Exception as e:
            logger.error(f"Failed to connect to bridge: {e}")
            return False

    def _frame(self, response_id: int, interaction_type: str) -> Dict[str, Any]:
        frame: Dict[str, Any] = {
            "response_id": response_id,
            "interaction_type": interaction_type,
            "transcript": list(self.transcript),
        }
        if self.session_id:
            frame["session_id"] = self.session_id
        return frame

    async def send_update(self, text: str) -> None:
        """Send a partial-transcript frame; the bridge does not answer these."""
        if not self.websocket:
            logger.error("Cannot send update: Not connected")
            return
        frame = self._frame(0, INTERACTION_UPDATE_ONLY)
        frame["transcript"].append({"role": USER_ROLE, "content": text})
        await self.websocket.send(json.dumps(frame))

    async def send_utterance(self, text: str, response_id: int = 1) -> Optional[RetellStreamResponse]:
        """
        Send a caller utterance and wait for the bridge's reply.

        Args:
            text: What the caller says; empty text starts the call
            response_id: Id the reply must echo

        Returns:
            The reply envelope, or None if not connected
        """
        if not self.websocket:
            logger.error("Cannot send utterance: Not connected")
            return None

        if text:
            self.transcript.append({"role": USER_ROLE, "content": text})
        await self.websocket.send(json.dumps(self._frame(response_id, "response_required")))

        response = RetellStreamResponse(**json.loads(await self.websocket.recv()))
        self.transcript.append({"role": "agent", "content": response.content})
        logger.info(f"Agent (response_id {response.response_id}): {response.content}")
        return response

    async def close(self) -> None:
        """Close the WebSocket connection."""
        if self.websocket:
            await self.websocket.close()
            self.websocket = None
            logger.info("Bridge WebSocket connection closed")
