"""Bearer token storage for authenticated backend calls.

The token survives restarts through LocalStorage. Storage failures are logged
and never raised: a lost token only means the operator logs in again.
"""

import structlog

from shared.storage import LocalStorage, StorageError

logger = structlog.get_logger(__name__)

AUTH_TOKEN_KEY = "auth_token"


class TokenStore:
    """Holds the current bearer token, mirrored to durable storage when given one."""

    def __init__(self, storage: LocalStorage | None = None) -> None:
        self._storage = storage
        self._token: str | None = None
        self._loaded = storage is None

    @property
    def token(self) -> str | None:
        if not self._loaded:
            self._loaded = True
            try:
                self._token = self._storage.get_item(AUTH_TOKEN_KEY)
            except StorageError as exc:
                logger.error("Failed to load auth token", error=str(exc))
        return self._token

    def set(self, token: str) -> None:
        self._token = token
        self._loaded = True
        if self._storage is not None:
            try:
                self._storage.set_item(AUTH_TOKEN_KEY, token)
            except StorageError as exc:
                logger.error("Failed to persist auth token", error=str(exc))

    def clear(self) -> None:
        self._token = None
        self._loaded = True
        if self._storage is not None:
            try:
                self._storage.remove_item(AUTH_TOKEN_KEY)
            except StorageError as exc:
                logger.error("Failed to clear auth token", error=str(exc))
