"""
Pydantic models for the Retell messages the bridge receives and sends.

The webhook body is deliberately left untyped (any JSON object is accepted and
searched by ``app.handlers.extraction``); only the WebSocket streaming protocol
and the JSON webhook reply have a fixed shape.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TranscriptTurn(BaseModel):
    """One turn of the call transcript as sent by Retell."""

    model_config = ConfigDict(extra="allow")

    role: str = Field("", description="Speaker of the turn, 'user' or 'agent'")
    content: str = Field("", description="What was said")

    @field_validator("role", "content", mode="before")
    def coerce_text(cls, v):
        """Treat null role/content as empty text and numbers as their text."""
        if v is None:
            return ""
        if isinstance(v, (int, float)):
            return str(v)
        return v


class RetellStreamRequest(BaseModel):
    """Inbound WebSocket message from Retell."""

    model_config = ConfigDict(extra="allow")

    response_id: int = Field(0, description="Id the reply must echo back")
    interaction_type: Optional[str] = Field(
        None, description="response_required, update_only, reminder_required, ..."
    )
    transcript: List[TranscriptTurn] = Field(default_factory=list)
    # Kept as sent; extraction stringifies it
    session_id: Optional[Any] = Field(None, description="Retell call/session identifier")

    @field_validator("response_id", mode="before")
    def default_response_id(cls, v):
        """A missing or null response_id is answered as 0."""
        return 0 if v is None else v

    @field_validator("transcript", mode="before")
    def default_transcript(cls, v):
        """Anything but a list of turns is an empty transcript."""
        if not isinstance(v, list):
            return []
        return [turn for turn in v if isinstance(turn, dict)]


class RetellStreamResponse(BaseModel):
    """Outbound WebSocket message carrying the agent's reply."""

    response_id: int = Field(0, description="Echo of the inbound response_id")
    content: str = Field(..., description="Text for Retell to speak")
    content_complete: bool = Field(True, description="Whether this is the final chunk")
    end_call: bool = Field(False, description="Whether Retell should hang up afterwards")


class WebhookReply(BaseModel):
    """JSON webhook response body."""

    reply: str = Field(..., description="Text for Retell to speak, empty on handshake")
