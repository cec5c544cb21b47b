"""
Command-line client that talks to a running bridge the way Retell does.

Examples:
    python client.py "I'd like to book a flight"
    python client.py --mode http --session demo-call "What are your hours?"
"""

import argparse
import asyncio
import json
import logging
import os
from typing import Optional

import requests

from app.config.constants import SIGNATURE_HEADER
from app.services.websocket_client import RetellClient
from app.utils.security import sign_payload

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("retell_client")


async def run_websocket_turn(url: str, text: str, session_id: Optional[str]) -> str:
    """Open a call, read the greeting, say ``text`` and return the reply."""
    client = RetellClient(url, session_id=session_id)
    if not await client.connect():
        return ""
    try:
        greeting = await client.send_utterance("", response_id=0)
        logger.info(f"Greeting: {greeting.content}")
        await client.send_update(text)
        reply = await client.send_utterance(text, response_id=1)
        return reply.content
    finally:
        await client.close()


def run_http_turn(url: str, text: str, session_id: Optional[str], secret: Optional[str]) -> str:
    """POST one webhook event and return the response body."""
    body = json.dumps({"sessionId": session_id or "default", "text": text})
    headers = {"Content-Type": "application/json"}
    if secret:
        headers[SIGNATURE_HEADER] = sign_payload(body, secret)

    response = requests.post(url, data=body.encode("utf-8"), headers=headers, timeout=30)
    logger.info(f"Webhook answered {response.status_code}")
    if response.headers.get("content-type", "").startswith("application/json"):
        return response.json().get("reply", "")
    return response.text


def parse_args():
    parser = argparse.ArgumentParser(description="Send one caller utterance to the bridge")
    parser.add_argument("text", help="What the caller says")
    parser.add_argument("--mode", choices=["ws", "http"], default="ws")
    parser.add_argument("--host", default="localhost:8000", help="Bridge host:port")
    parser.add_argument("--session", default=None, help="Session id to use")
    parser.add_argument(
        "--secret",
        default=os.getenv("RETELL_SIGNING_SECRET"),
        help="Sign webhook bodies with this secret (http mode)",
    )
    return parser.parse_args()


def main():
    args = parse_args()
    if args.mode == "ws":
        reply = asyncio.run(run_websocket_turn(f"ws://{args.host}/retell", args.text, args.session))
    else:
        reply = run_http_turn(f"http://{args.host}/retell", args.text, args.session, args.secret)
    print(reply)


if __name__ == "__main__":
    main()
