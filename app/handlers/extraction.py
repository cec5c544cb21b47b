"""
Field extraction from Retell event envelopes.

Retell has sent the caller's words under several different keys over time, so
every lookup here walks a fixed priority list and takes the first non-empty
value instead of trusting one schema.
"""

from typing import Any, Iterable, List, Mapping, Optional, Tuple

from app.config.constants import DEFAULT_SESSION_ID, SESSION_ID_KEYS, USER_ROLE


def _is_empty(value: Any) -> bool:
    return value is None or value is False or value == 0 or (
        isinstance(value, (str, list, dict, tuple)) and len(value) == 0
    )


def first_present(envelope: Mapping[str, Any], keys: Iterable[str]) -> Optional[Any]:
    """
    Return the first non-empty value found under ``keys``, in order.

    Args:
        envelope: The decoded event body
        keys: Candidate keys, highest priority first

    Returns:
        The value, or None if every key is missing or empty
    """
    for key in keys:
        value = envelope.get(key)
        if not _is_empty(value):
            return value
    return None


def _last_content(turns: Any) -> Any:
    """Return the ``content`` of the last element of a list of turns."""
    if not isinstance(turns, list) or not turns:
        return None
    last = turns[-1]
    if isinstance(last, Mapping):
        return last.get("content")
    return last


def extract_session_id(envelope: Mapping[str, Any]) -> str:
    """Resolve the conversation key, falling back to ``"default"``."""
    value = first_present(envelope, SESSION_ID_KEYS)
    return DEFAULT_SESSION_ID if value is None else str(value)


def extract_user_text(envelope: Mapping[str, Any]) -> str:
    """
    Resolve the caller's utterance from a webhook body.

    Order: text, transcript, user_input, last of messages, latest_user_message,
    message. A transcript sent as a list of turns contributes its last turn.
    """
    transcript = envelope.get("transcript")
    if isinstance(transcript, list):
        transcript = _last_content(transcript)

    candidates = {
        "text": envelope.get("text"),
        "transcript": transcript,
        "user_input": envelope.get("user_input"),
        "messages": _last_content(envelope.get("messages")),
        "latest_user_message": envelope.get("latest_user_message"),
        "message": envelope.get("message"),
    }
    value = first_present(candidates, candidates.keys())
    return "" if value is None else str(value)


def latest_user_utterance(transcript: Iterable[Any]) -> str:
    """
    Return the newest user turn's content, trimmed.

    Args:
        transcript: Turns as dicts or objects with ``role`` and ``content``

    Returns:
        The utterance, or an empty string if the caller has not spoken yet
    """
    turns: List[Any] = list(transcript or [])
    for turn in reversed(turns):
        if isinstance(turn, Mapping):
            role, content = turn.get("role"), turn.get("content")
        else:
            role, content = getattr(turn, "role", None), getattr(turn, "content", None)
        if role == USER_ROLE:
            return str(content or "").strip()
    return ""


def extract_turn(envelope: Mapping[str, Any]) -> Tuple[str, str]:
    """Return ``(session_id, user_text)`` for a webhook body."""
    return extract_session_id(envelope), extract_user_text(envelope)
