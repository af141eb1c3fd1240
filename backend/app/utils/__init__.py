"""
Utilities Package for the Social Saver backend.

logger:
    Structured logging (JSON or human-readable), uvicorn integration and
    context-bound logger adapters.

http:
    Blocking ``requests`` calls wrapped for asyncio, with redirect and
    timeout limits mapped to ``FetchError``.

title_utils:
    Slug-to-title conversion and placeholder title detection.
"""

from app.utils.logger import add_log_context, get_logger, setup_logging


__all__ = ["add_log_context", "get_logger", "setup_logging"]
