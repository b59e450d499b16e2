"""Support domain API package."""

from support.api.routes import admin_router, consultation_router, help_router

__all__ = ["consultation_router", "help_router", "admin_router"]
