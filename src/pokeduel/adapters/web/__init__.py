"""Web adapter for REST and WebSocket endpoints.

This module provides FastAPI-based REST and WebSocket endpoints exposing
the battle view to a browser.
"""

from pokeduel.adapters.web.server import (
    ErrorResponse,
    WebAdapter,
    create_web_adapter,
)

__all__ = [
    "ErrorResponse",
    "WebAdapter",
    "create_web_adapter",
]
