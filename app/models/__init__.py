"""
Models module for the Retell wire messages handled by the bridge.

Key components:
- message_schemas: Pydantic models for the WebSocket streaming protocol
  (``RetellStreamRequest``/``RetellStreamResponse``) and the JSON webhook reply.

Usage examples:
```python
from app.models.message_schemas import RetellStreamRequest, RetellStreamResponse

request = RetellStreamRequest(**json.loads(raw))
response = RetellStreamResponse(response_id=request.response_id, content="Sure, where to?")
await websocket.send_text(response.model_dump_json())
```
"""

from app.models.message_schemas import (
    RetellStreamRequest,
    RetellStreamResponse,
    TranscriptTurn,
    WebhookReply,
)
