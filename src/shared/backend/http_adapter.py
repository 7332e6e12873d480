"""HTTP adapter for the bakery REST backend.

Every response is a JSON envelope ``{"success": bool, "data": ..., "message"
| "error": str}``. Non-2xx responses and transport failures become
BackendError. A 401 from any endpoint clears the stored token and fires the
``on_unauthorized`` callback before UnauthorizedError is raised, regardless of
which call triggered it.
"""

from collections.abc import Callable

import httpx
import structlog

from shared.backend.auth import TokenStore
from shared.backend.errors import BackendError, UnauthorizedError
from shared.backend.port import BakeryBackend
from shared.backend.schemas import (
    AuthResult,
    Category,
    CreatedOrder,
    DesignOptions,
    DraftResult,
    MenuItem,
    QRSession,
    SessionStatus,
    SubmissionResult,
)

logger = structlog.get_logger(__name__)

DEFAULT_API_URL = "http://localhost:3001/api"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _short_token(token: str) -> str:
    return token[:12] + "..." if len(token) > 12 else token


class HttpBackend(BakeryBackend):
    """Bakery backend reached over HTTP with httpx."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        token_store: TokenStore | None = None,
        on_unauthorized: Callable[[], None] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.token_store = token_store or TokenStore()
        self.on_unauthorized = on_unauthorized
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    # -------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------
    def _request(self, method: str, url: str, json=None, params: dict | None = None):
        headers = {}
        token = self.token_store.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        try:
            response = self._client.request(method, url, json=json, params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Backend request failed", method=method, url=url, error=str(exc))
            raise BackendError(str(exc) or "Network error") from exc

        payload = self._decode(response)

        if response.status_code == 401:
            logger.warning("Backend rejected credentials", method=method, url=url)
            self.token_store.clear()
            if self.on_unauthorized is not None:
                self.on_unauthorized()
            raise UnauthorizedError(self._error_message(payload, "Unauthorized"), 401, payload)

        if response.is_error:
            message = self._error_message(payload, "Request failed")
            logger.error(
                "Backend returned an error",
                method=method,
                url=url,
                status_code=response.status_code,
                message=message,
            )
            raise BackendError(message, response.status_code, payload)

        return payload

    @staticmethod
    def _decode(response: httpx.Response):
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError:
                return response.text
        return response.text

    @staticmethod
    def _error_message(payload, default: str) -> str:
        if isinstance(payload, dict):
            return payload.get("message") or payload.get("error") or default
        return default

    @staticmethod
    def _data(payload, missing_message: str):
        data = payload.get("data") if isinstance(payload, dict) else None
        if data is None:
            raise BackendError(missing_message, payload=payload)
        return data

    # -------------------------------------------------------------------
    # Catalogue
    # -------------------------------------------------------------------
    def get_menu_items(self, category_id=None, item_type=None):
        payload = self._request(
            "GET",
            "/kiosk/menu",
            params={"category_id": category_id, "item_type": item_type},
        )
        data = payload.get("data") if isinstance(payload, dict) else None
        return [MenuItem.model_validate(item) for item in data or []]

    def get_menu_item(self, menu_item_id):
        payload = self._request("GET", f"/kiosk/menu/{menu_item_id}")
        return MenuItem.model_validate(self._data(payload, "Item not found"))

    def get_categories(self):
        payload = self._request("GET", "/kiosk/categories")
        data = payload.get("data") if isinstance(payload, dict) else None
        return [Category.model_validate(category) for category in data or []]

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    def create_order(
        self,
        items,
        payment_method,
        order_type,
        order_source,
        special_instructions=None,
        reference_number=None,
    ):
        body = {
            "items": items,
            "payment_method": payment_method,
            "order_type": order_type,
            "order_source": order_source,
        }
        if special_instructions:
            body["special_instructions"] = special_instructions
        if reference_number:
            body["reference_number"] = reference_number

        payload = self._request("POST", "/kiosk/orders", json=body)
        return CreatedOrder.model_validate(self._data(payload, "Failed to create order"))

    # -------------------------------------------------------------------
    # Custom cake handoff
    # -------------------------------------------------------------------
    def generate_qr_session(self, kiosk_id):
        payload = self._request("POST", "/kiosk/custom-cake/generate-qr", json={"kiosk_id": kiosk_id})
        session = QRSession.model_validate(self._data(payload, "Failed to generate QR code session"))
        logger.info(
            "QR session generated",
            kiosk_id=kiosk_id,
            session_token=_short_token(session.session_token),
            expires_in=session.expires_in,
        )
        return session

    def poll_session_status(self, session_token):
        payload = self._request("GET", f"/kiosk/custom-cake/session/{session_token}/poll")
        return SessionStatus.model_validate(self._data(payload, "Failed to poll session status"))

    def complete_customization(self, session_token, customization_data):
        self._request("PUT", f"/kiosk/custom-cake/session/{session_token}", json=customization_data)
        self._request("POST", f"/kiosk/custom-cake/session/{session_token}/complete")

    def cancel_session(self, session_token):
        self._request("DELETE", f"/kiosk/custom-cake/session/{session_token}")

    # -------------------------------------------------------------------
    # Custom cake requests
    # -------------------------------------------------------------------
    def get_design_options(self):
        payload = self._request("GET", "/custom-cake/options")
        return DesignOptions.model_validate(self._data(payload, "Failed to load design options"))

    def save_draft(self, session_token, design):
        body = {"session_token": session_token, **design}
        payload = self._request("POST", "/custom-cake/save-draft", json=body)
        return DraftResult.model_validate(self._data(payload, "Failed to save draft"))

    def submit_for_review(self, request_id):
        payload = self._request("POST", "/custom-cake/submit", json={"request_id": request_id})
        data = payload.get("data") if isinstance(payload, dict) else None
        return SubmissionResult.model_validate({"request_id": request_id, **(data or {})})

    # -------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------
    def _login(self, url: str, credentials: dict) -> AuthResult:
        payload = self._request("POST", url, json=credentials)
        result = AuthResult.model_validate(self._data(payload, "Login failed"))
        self.token_store.set(result.token)
        return result

    def login_admin(self, username, password):
        return self._login("/auth/admin/login", {"username": username, "password": password})

    def login_cashier(self, cashier_code, pin):
        return self._login("/auth/cashier/login", {"cashier_code": cashier_code, "pin": pin})

    def logout(self):
        self.token_store.clear()
