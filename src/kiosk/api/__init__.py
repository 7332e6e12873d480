"""Kiosk domain API package."""

from kiosk.api.routes import cart_router, handoff_router, menu_router

__all__ = ["cart_router", "menu_router", "handoff_router"]
