"""Errors raised at the backend service boundary."""


class BackendError(Exception):
    """A backend call failed: network error, timeout, or a non-2xx response.

    ``status_code`` is None when no response was received at all.
    """

    def __init__(self, message: str, status_code: int | None = None, payload=None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class UnauthorizedError(BackendError):
    """The backend rejected the bearer token (HTTP 401)."""
