"""
Bot module: the connection to the conversational backend.

Key components:
- conversation_relay: ``ConversationRelay`` posts a caller utterance to the
  Botpress conversation for the session and reads back the newest reply.

Usage examples:
```python
from app.bot.conversation_relay import ConversationRelay
from app.config.settings import load_settings

relay = ConversationRelay(load_settings())
reply = await relay.ask("call-123", "What are your opening hours?")
```
"""
