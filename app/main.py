"""
FastAPI server bridging Retell voice calls to a Botpress bot.

Retell reaches the bridge either through the HTTP webhook or through the
streaming WebSocket, both on ``/retell``. Each caller utterance is relayed to
the Botpress conversation named by the call's session id and the bot's reply is
returned in the shape Retell expects for that channel.
"""

from pathlib import Path
from typing import Optional

import dotenv
from fastapi import FastAPI, Header, Request, WebSocket
from fastapi.responses import PlainTextResponse

from app.bot.conversation_relay import ConversationRelay
from app.config.constants import RETELL_PATH, SIGNATURE_HEADER
from app.config.logging_config import configure_logging
from app.config.settings import Settings, load_settings
from app.exceptions import SignatureError
from app.handlers.webhook_handlers import check_signature, webhook_handler
from app.websocket_manager import WebSocketManager

# Load environment variables from .env file if it exists
env_path = Path(".") / ".env"
if env_path.exists():
    dotenv.load_dotenv(env_path)

# Configure logging
logger = configure_logging()


def create_app(
    settings: Optional[Settings] = None,
    relay: Optional[ConversationRelay] = None,
) -> FastAPI:
    """Build the bridge application.

    Args:
        settings: Configuration; read from the environment when omitted
        relay: Backend relay; built from ``settings`` when omitted

    Returns:
        FastAPI: the configured application
    """
    settings = settings or load_settings()
    relay = relay or ConversationRelay(settings)
    websocket_manager = WebSocketManager(relay)
    handle_webhook = webhook_handler(settings.webhook_format)

    app = FastAPI(
        title="Retell Botpress Bridge",
        description="Relays Retell call events to a Botpress bot and returns its replies",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.relay = relay
    app.state.websocket_manager = websocket_manager

    @app.exception_handler(SignatureError)
    async def signature_error_handler(request: Request, exc: SignatureError):
        return PlainTextResponse("bad signature", status_code=401)

    @app.post(RETELL_PATH)
    async def retell_webhook(
        request: Request,
        x_retell_signature: Optional[str] = Header(None, alias=SIGNATURE_HEADER),
    ):
        """Retell webhook: one caller turn in, one reply out (always 200 once signed)."""
        body = await request.body()
        check_signature(body, x_retell_signature, settings.signing_secret)
        return await handle_webhook(body, relay)

    @app.websocket(RETELL_PATH)
    async def retell_websocket(websocket: WebSocket):
        """Retell streaming endpoint; frames are answered one by one."""
        await websocket_manager.handle_websocket(websocket)

    @app.get("/health", response_class=PlainTextResponse)
    async def health_check():
        """Liveness probe."""
        return "ok"

    @app.get("/")
    async def root():
        """Basic information about the bridge."""
        return {
            "name": app.title,
            "description": app.description,
            "version": app.version,
            "webhook_format": settings.webhook_format,
            "endpoints": {
                RETELL_PATH: "Retell webhook (POST) and streaming WebSocket",
                "/health": "Health check endpoint",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings
    logger.info(f"Starting server on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, http="h11")
