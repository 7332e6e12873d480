"""Bakery backend factory.

Provides get_backend() / set_backend() to swap implementations:
- FakeBackend for development and testing (default)
- HttpBackend for a real bakery REST API

The adapter is chosen with the BAKERY_BACKEND environment variable.
"""

import os

from shared.backend.port import BakeryBackend

_current_backend: BakeryBackend | None = None


def get_backend() -> BakeryBackend:
    """Return the configured bakery backend (singleton)."""
    global _current_backend
    if _current_backend is None:
        adapter = os.environ.get("BAKERY_BACKEND", "fake")
        if adapter == "fake":
            from shared.backend.fake_adapter import FakeBackend

            _current_backend = FakeBackend()
        elif adapter == "http":
            from shared.backend.auth import TokenStore
            from shared.backend.http_adapter import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS, HttpBackend
            from shared.storage import LocalStorage

            _current_backend = HttpBackend(
                base_url=os.environ.get("BAKERY_API_URL", DEFAULT_API_URL),
                timeout=float(os.environ.get("BAKERY_API_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)),
                token_store=TokenStore(LocalStorage()),
            )
        else:
            raise ValueError(f"Unknown bakery backend adapter: {adapter}")
    return _current_backend


def set_backend(backend: BakeryBackend) -> None:
    """Override the active backend (useful for tests)."""
    global _current_backend
    _current_backend = backend


def reset_backend() -> None:
    """Reset to the configured default backend."""
    global _current_backend
    _current_backend = None
