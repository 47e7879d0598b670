"""
Controllers Package - Presentation Layer

This package contains FastAPI controllers (routers) that handle
HTTP requests and responses. Controllers are responsible for
input validation, error handling, and mapping between API DTOs
and application layer use cases.
"""

from .assets_controller import fallback_router as assets_fallback_router
from .assets_controller import router as assets_router
from .system_controller import router as system_router

__all__ = ["assets_router", "assets_fallback_router", "system_router"]
