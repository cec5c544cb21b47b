"""
Run script for starting the Retell Botpress Bridge.

Usage:
    python run.py [--port PORT] [--host HOST] [--log-level LEVEL]
"""

import argparse
import os
import sys
from pathlib import Path

import dotenv
import uvicorn

sys.path.append(str(Path(__file__).parent))

# Load .env before reading defaults from the environment
dotenv.load_dotenv(Path(__file__).parent / ".env")

from app.config.logging_config import configure_logging
from app.config.settings import load_settings

logger = configure_logging()


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Start the Retell Botpress Bridge server"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8000")),
        help="Port to run the server on (default: 8000 or PORT env var)",
    )
    parser.add_argument(
        "--host",
        default=os.getenv("HOST", "0.0.0.0"),
        help="Host to bind the server to (default: 0.0.0.0 or HOST env var)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO").upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO or LOG_LEVEL env var)",
    )
    return parser.parse_args()


def main():
    """Main entry point for starting the server."""
    args = parse_args()
    configure_logging(args.log_level)

    try:
        settings = load_settings()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    if not settings.bot_id or not settings.bot_token:
        logger.warning("BOTPRESS_BOT_ID or BOTPRESS_TOKEN not set; every relay call will fail")

    logger.info(f"Starting server on http://{args.host}:{args.port}")
    logger.info(f"Webhook format: {settings.webhook_format}")
    logger.info(f"Signature check enabled: {bool(settings.signing_secret)}")

    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
        http="h11",
        reload=os.getenv("ENV", "production").lower() == "development",
    )


if __name__ == "__main__":
    main()
