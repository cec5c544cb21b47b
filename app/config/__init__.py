"""
Configuration module for the Retell to Botpress bridge.

Key components:
- constants: wire-level names, envelope key priorities and the fixed phrases
  (greeting, apology, no-reply fallback) the bridge answers with.
- logging_config: console and rotating-file logging for the ``retell_bridge`` logger.
- settings: the immutable ``Settings`` read from the environment at start-up.

Usage examples:
```python
from app.config.constants import LOGGER_NAME, GREETING_TEXT
from app.config.logging_config import configure_logging
from app.config.settings import load_settings

logger = configure_logging()
settings = load_settings()
logger.info(f"Relaying to bot {settings.bot_id}")
```
"""
