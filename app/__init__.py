"""
Retell Botpress Bridge

Relays calls from the Retell voice-AI telephony platform to a Botpress bot.
Retell delivers each caller turn either as an HTTP webhook or as a frame on a
streaming WebSocket; the bridge extracts the session id and utterance, posts the
utterance to the Botpress conversation for that session, reads back the bot's
newest message and answers Retell in the shape the channel expects.

Key Components:
- bot: the relay to the Botpress conversation API
- config: constants, logging setup and the immutable settings
- handlers: field extraction and the webhook/WebSocket channel handlers
- models: Pydantic models for the Retell wire messages
- services: a Retell-like WebSocket client for manual testing
- websocket_manager: per-connection loop for the streaming channel

Getting Started:
1. Set up environment variables:
   - BOTPRESS_BASE_URL: Botpress API base URL (default https://api.botpress.cloud)
   - BOTPRESS_BOT_ID: The bot to talk to
   - BOTPRESS_TOKEN: Bearer token for the Botpress API
   - RETELL_SIGNING_SECRET: Optional shared secret for x-retell-signature
   - RETELL_WEBHOOK_FORMAT: text (default) or json
   - PORT / HOST / LOG_LEVEL

2. Start the server:
   ```bash
   python run.py
   ```

3. Point Retell's custom LLM URL at http://your-server:8000/retell
   (or ws://your-server:8000/retell for the streaming integration).
"""
