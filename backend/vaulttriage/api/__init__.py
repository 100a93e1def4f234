"""HTTP API routes"""

from .routes import router, get_connection

__all__ = ["router", "get_connection"]
