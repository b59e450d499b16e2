"""Access API package."""

from access.api.routes import credentials_router

__all__ = ["credentials_router"]
