"""
Services module for talking to the bridge from the outside.

Key components:
- websocket_client: ``RetellClient``, a WebSocket client that sends transcript
  frames the way Retell does, for manual testing of a running bridge.

Usage examples:
```python
from app.services.websocket_client import RetellClient

client = RetellClient("ws://localhost:8000/retell", session_id="demo-call")
if await client.connect():
    greeting = await client.send_utterance("")
    reply = await client.send_utterance("I'd like to book a flight", response_id=2)
    await client.close()
```
"""
