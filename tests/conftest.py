import json
import logging

import httpx
import pytest

from app.bot.conversation_relay import ConversationRelay
from app.config.settings import Settings


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(level=logging.NOTSET)
    yield


class FakeBotpress:
    """Stands in for the Botpress messages API behind an httpx.MockTransport."""

    def __init__(self, reply="hi there", post_status=200, read_status=200, read_body=None):
        self.post_status = post_status
        self.read_status = read_status
        self.read_body = read_body if read_body is not None else {
            "messages": [{"payload": {"text": reply}}]
        }
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST":
            if self.post_status >= 400:
                return httpx.Response(self.post_status, text="backend exploded")
            return httpx.Response(self.post_status, json={"message": {"id": "m-1"}})
        if self.read_status >= 400:
            return httpx.Response(self.read_status, text="read failed")
        return httpx.Response(self.read_status, json=self.read_body)

    @property
    def posted_bodies(self):
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]


@pytest.fixture
def settings():
    return Settings(
        backend_base_url="https://botpress.test",
        bot_id="bot-1",
        bot_token="secret-token",
    )


@pytest.fixture
def backend():
    return FakeBotpress()


@pytest.fixture
def relay(settings, backend):
    return ConversationRelay(settings, transport=httpx.MockTransport(backend))


@pytest.fixture
def make_relay(settings):
    """Build a relay wired to a FakeBotpress configured with ``kwargs``."""

    def _make(**kwargs):
        backend = FakeBotpress(**kwargs)
        return ConversationRelay(settings, transport=httpx.MockTransport(backend)), backend

    return _make
