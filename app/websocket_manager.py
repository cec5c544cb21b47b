"""
WebSocket connection manager for the Retell streaming channel.

This module implements the server-side handling of one Retell WebSocket
connection: accept it, hand every text frame to the stream handler and send
back whatever reply envelope the handler produces, until the caller hangs up.
"""

import logging

from fastapi import WebSocket, WebSocketDisconnect

from app.bot.conversation_relay import ConversationRelay
from app.config.constants import LOGGER_NAME
from app.handlers.stream_handlers import handle_stream_message

logger = logging.getLogger(LOGGER_NAME)


class WebSocketManager:
    """Routes Retell WebSocket frames to the stream handler and sends the replies.

    No state is kept between frames; each frame carries the whole transcript
    and is answered on its own.
    """

    def __init__(self, relay: ConversationRelay):
        self.relay = relay

    async def handle_websocket(self, websocket: WebSocket):
        """Handle a WebSocket connection throughout its lifecycle.

        Args:
            websocket (WebSocket): The FastAPI WebSocket connection object
        """
        await websocket.accept()
        logger.info("WebSocket connection established")

        try:
            while True:
                data = await websocket.receive_text()
                response = await handle_stream_message(data, self.relay)
                if response is None:
                    continue
                await websocket.send_text(response.model_dump_json())
                logger.debug(f"Sent response for response_id {response.response_id}")
        except WebSocketDisconnect:
            logger.info("WebSocket disconnected by client")
        except Exception as e:
            logger.error(f"Error in WebSocket connection: {e}", exc_info=True)
            await websocket.close()
        finally:
            logger.info("WebSocket connection closed")
