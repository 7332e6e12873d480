"""Configurable in-memory bakery backend for development and testing.

Simulates the REST backend without any network calls. It can be seeded with
menu items, told to fail, and scripted with a sequence of session statuses,
which makes kiosk and cake studio flows testable end to end.
"""

from itertools import count
from uuid import uuid4

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

# Mirrors the sample options the mobile editor falls back to
_DEFAULT_DESIGN_OPTIONS = {
    "flavors": [
        {"flavor_id": 1, "flavor_name": "Chocolate", "base_price_per_tier": 100},
        {"flavor_id": 2, "flavor_name": "Vanilla", "base_price_per_tier": 80},
        {"flavor_id": 3, "flavor_name": "Strawberry", "base_price_per_tier": 90},
        {"flavor_id": 4, "flavor_name": "Red Velvet", "base_price_per_tier": 120},
    ],
    "sizes": [
        {"size_id": 1, "size_name": 'Small (6")', "base_price_multiplier": 1.0},
        {"size_id": 2, "size_name": 'Medium (8")', "base_price_multiplier": 1.5},
        {"size_id": 3, "size_name": 'Large (10")', "base_price_multiplier": 2.0},
        {"size_id": 4, "size_name": 'XL (12")', "base_price_multiplier": 2.5},
    ],
    "themes": [
        {"theme_id": 1, "theme_name": "Birthday", "base_additional_cost": 200},
        {"theme_id": 2, "theme_name": "Wedding", "base_additional_cost": 500},
        {"theme_id": 3, "theme_name": "Anniversary", "base_additional_cost": 300},
    ],
    "frostingTypes": ["buttercream", "fondant", "whipped_cream", "ganache", "cream_cheese"],
    "candleTypes": ["number", "regular", "sparkler", "none"],
    "textFonts": ["script", "bold", "elegant", "playful", "modern"],
    "textPositions": ["top", "center", "bottom"],
}


class FakeBackend(BakeryBackend):
    """Configurable fake bakery backend."""

    def __init__(
        self,
        menu_items: list[MenuItem] | None = None,
        categories: list[Category] | None = None,
    ) -> None:
        self.menu_items: list[MenuItem] = list(menu_items or [])
        self.categories: list[Category] = list(categories or [])
        self.should_succeed: bool = True
        self.failure_reason: str = "Backend unavailable"
        self.failure_status: int | None = 503
        self.session_statuses: dict[str, list[SessionStatus]] = {}
        self.drafts: dict[int, dict] = {}
        self.orders: list[dict] = []
        self.token: str | None = None
        self.calls: list[dict] = []
        self._ids = count(1)

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Backend unavailable",
        failure_status: int | None = 503,
    ) -> None:
        """Configure backend behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.failure_status = failure_status

    def script_session(self, session_token: str, statuses: list[SessionStatus]) -> None:
        """Queue the statuses successive polls of ``session_token`` return."""
        self.session_statuses[session_token] = list(statuses)

    def _record(self, method: str, **kwargs) -> None:
        self.calls.append({"method": method, **kwargs})
        if self.should_succeed:
            return
        if self.failure_status == 401:
            self.token = None
            raise UnauthorizedError(self.failure_reason, 401)
        raise BackendError(self.failure_reason, self.failure_status)

    # -------------------------------------------------------------------
    # Catalogue
    # -------------------------------------------------------------------
    def get_menu_items(self, category_id=None, item_type=None):
        self._record("get_menu_items", category_id=category_id, item_type=item_type)
        return [
            item
            for item in self.menu_items
            if (category_id is None or item.category_id == category_id)
            and (item_type is None or item.item_type == item_type)
        ]

    def get_menu_item(self, menu_item_id):
        self._record("get_menu_item", menu_item_id=menu_item_id)
        for item in self.menu_items:
            if item.menu_item_id == menu_item_id:
                return item
        raise BackendError("Item not found", 404)

    def get_categories(self):
        self._record("get_categories")
        return list(self.categories)

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
        self._record("create_order", items=items, payment_method=payment_method, order_type=order_type)

        prices = {item.menu_item_id: item.current_price for item in self.menu_items}
        total = sum(prices.get(item["menu_item_id"], 0.0) * item["quantity"] for item in items)
        order_id = next(self._ids)
        self.orders.append(
            {
                "order_id": order_id,
                "items": items,
                "payment_method": payment_method,
                "order_type": order_type,
                "order_source": order_source,
                "special_instructions": special_instructions,
                "reference_number": reference_number,
            }
        )
        return CreatedOrder(
            order_id=order_id,
            verification_code=uuid4().hex[:6].upper(),
            order_number=f"ORD-{order_id:05d}",
            order_status="pending",
            payment_method=payment_method,
            total_amount=total,
            final_amount=total,
        )

    # -------------------------------------------------------------------
    # Custom cake handoff
    # -------------------------------------------------------------------
    def generate_qr_session(self, kiosk_id):
        self._record("generate_qr_session", kiosk_id=kiosk_id)
        token = f"fake-session-{uuid4().hex[:12]}"
        self.session_statuses.setdefault(token, [])
        return QRSession(
            session_token=token,
            qr_code_url=f"https://fake.local/qr/{token}.png",
            editor_url=f"https://fake.local/editor?session={token}",
            expires_in=300,
        )

    def poll_session_status(self, session_token):
        self._record("poll_session_status", session_token=session_token)
        queue = self.session_statuses.get(session_token)
        if queue is None:
            raise BackendError("Session not found", 404)
        if len(queue) > 1:
            return queue.pop(0)
        if queue:
            return queue[0]
        return SessionStatus(status="pending")

    def complete_customization(self, session_token, customization_data):
        self._record("complete_customization", session_token=session_token)
        self.session_statuses[session_token] = [
            SessionStatus(status="completed", customization_data=customization_data)
        ]

    def cancel_session(self, session_token):
        self._record("cancel_session", session_token=session_token)
        self.session_statuses[session_token] = [SessionStatus(status="expired")]

    # -------------------------------------------------------------------
    # Custom cake requests
    # -------------------------------------------------------------------
    def get_design_options(self):
        self._record("get_design_options")
        return DesignOptions.model_validate(_DEFAULT_DESIGN_OPTIONS)

    def save_draft(self, session_token, design):
        self._record("save_draft", session_token=session_token)
        request_id = next(self._ids)
        self.drafts[request_id] = dict(design)
        return DraftResult(request_id=request_id)

    def submit_for_review(self, request_id):
        self._record("submit_for_review", request_id=request_id)
        if request_id not in self.drafts:
            raise BackendError("Custom cake request not found", 404)
        return SubmissionResult(request_id=request_id, status="pending_review")

    # -------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------
    def login_admin(self, username, password):
        self._record("login_admin", username=username)
        self.token = f"fake-token-{uuid4().hex[:8]}"
        return AuthResult(token=self.token, user={"username": username, "role": "admin"})

    def login_cashier(self, cashier_code, pin):
        self._record("login_cashier", cashier_code=cashier_code)
        self.token = f"fake-token-{uuid4().hex[:8]}"
        return AuthResult(token=self.token, user={"cashier_code": cashier_code, "role": "cashier"})

    def logout(self):
        self.token = None
