import pytest

from app.config.constants import DEFAULT_SESSION_ID
from app.handlers.extraction import (
    extract_session_id,
    extract_turn,
    extract_user_text,
    first_present,
    latest_user_utterance,
)
from app.models.message_schemas import TranscriptTurn


class TestFirstPresent:

    def test_returns_first_non_empty_value_in_priority_order(self):
        envelope = {"b": "second", "a": "", "c": "third"}
        assert first_present(envelope, ["a", "b", "c"]) == "second"

    def test_skips_none_and_empty_containers(self):
        envelope = {"a": None, "b": [], "c": {}, "d": "x"}
        assert first_present(envelope, ["a", "b", "c", "d"]) == "x"

    def test_keeps_whitespace_strings(self):
        assert first_present({"a": "  "}, ["a"]) == "  "

    def test_returns_none_when_nothing_matches(self):
        assert first_present({"other": "value"}, ["a", "b"]) is None


class TestExtractSessionId:

    @pytest.mark.parametrize("key", ["sessionId", "callId", "conversationId", "session_id"])
    def test_each_recognised_key(self, key):
        assert extract_session_id({key: "call-42"}) == "call-42"

    def test_priority_order(self):
        envelope = {"session_id": "d", "conversationId": "c", "callId": "b", "sessionId": "a"}
        assert extract_session_id(envelope) == "a"

    def test_empty_value_falls_through(self):
        assert extract_session_id({"sessionId": "", "callId": "call-1"}) == "call-1"

    def test_non_string_value_is_stringified(self):
        assert extract_session_id({"callId": 12345}) == "12345"

    def test_default_when_missing(self):
        assert extract_session_id({}) == DEFAULT_SESSION_ID == "default"


class TestExtractUserText:

    def test_text_wins(self):
        assert extract_user_text({"text": "hello", "message": "other"}) == "hello"

    def test_transcript_string(self):
        assert extract_user_text({"transcript": "book a flight"}) == "book a flight"

    def test_transcript_list_uses_last_turn(self):
        envelope = {
            "transcript": [
                {"role": "agent", "content": "How can I help?"},
                {"role": "user", "content": "I need a quote"},
            ]
        }
        assert extract_user_text(envelope) == "I need a quote"

    def test_user_input_before_messages(self):
        envelope = {"user_input": "from user_input", "messages": [{"content": "from messages"}]}
        assert extract_user_text(envelope) == "from user_input"

    def test_last_message_content(self):
        envelope = {"messages": [{"content": "first"}, {"content": "last"}]}
        assert extract_user_text(envelope) == "last"

    def test_latest_user_message_then_message(self):
        assert extract_user_text({"latest_user_message": "latest", "message": "m"}) == "latest"
        assert extract_user_text({"message": "m"}) == "m"

    def test_empty_when_nothing_recognised(self):
        assert extract_user_text({"event": "call_started"}) == ""

    def test_empty_messages_list_falls_through(self):
        assert extract_user_text({"messages": [], "message": "fallback"}) == "fallback"


class TestLatestUserUtterance:

    def test_scans_from_the_end_for_a_user_turn(self):
        transcript = [
            {"role": "user", "content": "old"},
            {"role": "user", "content": "  book a flight "},
            {"role": "agent", "content": "Sure"},
        ]
        assert latest_user_utterance(transcript) == "book a flight"

    def test_accepts_model_turns(self):
        transcript = [TranscriptTurn(role="user", content="hello")]
        assert latest_user_utterance(transcript) == "hello"

    def test_no_user_turn(self):
        assert latest_user_utterance([{"role": "agent", "content": "Hi"}]) == ""
        assert latest_user_utterance([]) == ""
        assert latest_user_utterance(None) == ""


def test_extract_turn():
    assert extract_turn({"sessionId": "abc", "text": "hello"}) == ("abc", "hello")
    assert extract_turn({}) == ("default", "")
