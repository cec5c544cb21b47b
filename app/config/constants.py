"""
Constants and configuration values used throughout the application.

This module defines constants that are used across different parts of the bridge,
providing a centralized location for wire-level names and the fixed phrases the
bridge speaks on behalf of the assistant.
"""

# Logger name used throughout the application
LOGGER_NAME = "retell_bridge"

# Route shared by the webhook and the WebSocket channel
RETELL_PATH = "/retell"

# Header carrying the hex HMAC-SHA256 of the request body
SIGNATURE_HEADER = "x-retell-signature"

# Webhook response formats
WEBHOOK_FORMAT_TEXT = "text"
WEBHOOK_FORMAT_JSON = "json"
WEBHOOK_FORMATS = (WEBHOOK_FORMAT_TEXT, WEBHOOK_FORMAT_JSON)

# Inbound envelope keys, in lookup priority order
SESSION_ID_KEYS = ("sessionId", "callId", "conversationId", "session_id")
DEFAULT_SESSION_ID = "default"

# Partial ASR updates carry this interaction type and never get a reply
INTERACTION_UPDATE_ONLY = "update_only"
USER_ROLE = "user"

# Fixed phrases
GREETING_TEXT = (
    "Hi, I’m Mila with Helvetica Group. "
    "Are you a broker, or do you have general questions?"
)
APOLOGY_TEXT = "I hit an issue reaching the assistant. Please try again."
NO_REPLY_TEXT = "Sorry, I didn't catch that. Could you say it again?"

# Default Botpress Cloud endpoint
DEFAULT_BACKEND_BASE_URL = "https://api.botpress.cloud"
