"""Cake Studio domain API package."""

from cake_studio.api.routes import design_router

__all__ = ["design_router"]
