import dataclasses
import json

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from app.config.constants import APOLOGY_TEXT, GREETING_TEXT
from app.main import app, create_app
from app.utils.security import sign_payload


@pytest.fixture
def text_client(settings, relay):
    return TestClient(create_app(settings, relay))


@pytest.fixture
def json_client(settings, relay):
    json_settings = dataclasses.replace(settings, webhook_format="json")
    return TestClient(create_app(json_settings, relay))


@pytest.fixture
def signed_client(settings, relay):
    signed_settings = dataclasses.replace(settings, signing_secret="s3cret")
    return TestClient(create_app(signed_settings, relay))


def test_module_level_app_routes():
    route_paths = [route.path for route in app.routes]
    assert "/retell" in route_paths
    assert "/health" in route_paths
    assert "/" in route_paths


def test_health_check(text_client, backend):
    response = text_client.get("/health")

    assert response.status_code == 200
    assert response.text == "ok"
    assert backend.requests == []


def test_root_endpoint(text_client):
    response = text_client.get("/")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Retell Botpress Bridge"
    assert body["webhook_format"] == "text"
    assert "/retell" in body["endpoints"]
    assert "/health" in body["endpoints"]


class TestTextWebhookRoute:

    def test_handshake_greets(self, text_client, backend):
        response = text_client.post("/retell", json={"callId": "c-1"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == GREETING_TEXT
        assert backend.requests == []

    def test_reply_as_plain_text(self, text_client):
        response = text_client.post("/retell", json={"sessionId": "abc", "text": "hello"})

        assert response.status_code == 200
        assert response.text == "hi there"

    def test_backend_failure_apologises(self, settings, make_relay):
        relay, _ = make_relay(post_status=500)
        client = TestClient(create_app(settings, relay))

        response = client.post("/retell", json={"sessionId": "abc", "text": "hello"})

        assert response.status_code == 200
        assert response.text == APOLOGY_TEXT


class TestJsonWebhookRoute:

    def test_round_trip(self, json_client, backend):
        response = json_client.post("/retell", json={"sessionId": "abc", "text": "hello"})

        assert response.status_code == 200
        assert response.json() == {"reply": "hi there"}
        assert backend.requests[0].url.path == "/v1/bots/bot-1/conversations/abc/messages"

    def test_handshake(self, json_client):
        response = json_client.post("/retell", json={})

        assert response.json() == {"reply": ""}


class TestSignedWebhookRoute:

    def test_bad_signature_is_rejected(self, signed_client, backend):
        body = json.dumps({"sessionId": "abc", "text": "hello"}).encode()

        response = signed_client.post(
            "/retell",
            content=body,
            headers={"Content-Type": "application/json", "x-retell-signature": "0" * 64},
        )

        assert response.status_code == 401
        assert response.text == "bad signature"
        assert backend.requests == []

    def test_good_signature_is_accepted(self, signed_client):
        body = json.dumps({"sessionId": "abc", "text": "hello"}).encode()

        response = signed_client.post(
            "/retell",
            content=body,
            headers={
                "Content-Type": "application/json",
                "x-retell-signature": sign_payload(body, "s3cret"),
            },
        )

        assert response.status_code == 200
        assert response.text == "hi there"

    def test_non_ascii_signature_is_rejected(self, signed_client, backend):
        body = json.dumps({"text": "hello"}).encode()

        response = signed_client.post(
            "/retell",
            content=body,
            headers={
                "Content-Type": "application/json",
                "x-retell-signature": "caf\u00e9".encode("latin-1"),
            },
        )

        assert response.status_code == 401
        assert response.text == "bad signature"
        assert backend.requests == []

    def test_missing_header_skips_check(self, signed_client):
        response = signed_client.post("/retell", json={"text": "hello"})

        assert response.status_code == 200
        assert response.text == "hi there"


class TestWebSocketRoute:

    def test_streaming_round_trip(self, text_client):
        with text_client.websocket_connect("/retell") as websocket:
            websocket.send_text(json.dumps({"response_id": 0, "transcript": []}))
            assert websocket.receive_json()["content"] == GREETING_TEXT

            websocket.send_text(json.dumps({
                "response_id": 3,
                "interaction_type": "update_only",
                "transcript": [{"role": "user", "content": "book a"}],
            }))
            websocket.send_text(json.dumps({
                "response_id": 7,
                "transcript": [{"role": "user", "content": "book a flight"}],
            }))

            # The update_only frame got no answer, so the next message is for 7
            assert websocket.receive_json() == {
                "response_id": 7,
                "content": "hi there",
                "content_complete": True,
                "end_call": False,
            }

    @pytest.mark.parametrize("session_id, expected", [("call-9", "call-9"), (12345, "12345")])
    def test_session_id_addresses_the_conversation(self, text_client, backend, session_id, expected):
        with text_client.websocket_connect("/retell") as websocket:
            websocket.send_text(json.dumps({
                "response_id": 4,
                "session_id": session_id,
                "transcript": [{"role": "user", "content": "book a flight"}],
            }))
            assert websocket.receive_json()["response_id"] == 4

        assert [r.url.path for r in backend.requests] == [
            f"/v1/bots/bot-1/conversations/{expected}/messages"
        ] * 2

    def test_other_paths_are_refused(self, text_client):
        with pytest.raises(WebSocketDisconnect):
            with text_client.websocket_connect("/not-retell"):
                pass
