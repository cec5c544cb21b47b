"""
Handlers module for the Retell channels served by the bridge.

Key components:
- extraction: prioritised lookup of the session id and caller utterance in
  Retell envelopes of varying shape.
- webhook_handlers: the HTTP webhook in its plain-text and JSON deployments,
  including the optional request-signature check.
- stream_handlers: the WebSocket streaming protocol, one reply per frame.
- boundary: the shared mapping from any failure to the channel's apology reply.
"""
