"""Catalogue domain API package."""

from catalogue.api.routes import plan_router

__all__ = ["plan_router"]
