"""Bakery backend port (abstract interface).

Defines the contract every backend adapter implements. The kiosk and the
cake studio only ever talk to this interface, so HttpBackend (real REST API)
and FakeBackend (dev/test) are interchangeable.

All operations raise BackendError on failure and UnauthorizedError when the
backend rejects the bearer token.
"""

from abc import ABC, abstractmethod

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


class BakeryBackend(ABC):
    """Abstract bakery backend interface."""

    # -------------------------------------------------------------------
    # Catalogue
    # -------------------------------------------------------------------
    @abstractmethod
    def get_menu_items(self, category_id: int | None = None, item_type: str | None = None) -> list[MenuItem]:
        """List menu items, optionally filtered by category or item type."""
        ...

    @abstractmethod
    def get_menu_item(self, menu_item_id: int) -> MenuItem:
        """Fetch a single menu item."""
        ...

    @abstractmethod
    def get_categories(self) -> list[Category]:
        """List active categories."""
        ...

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    @abstractmethod
    def create_order(
        self,
        items: list[dict],
        payment_method: str,
        order_type: str,
        order_source: str,
        special_instructions: str | None = None,
        reference_number: str | None = None,
    ) -> CreatedOrder:
        """Create an order from order-item projections."""
        ...

    # -------------------------------------------------------------------
    # Custom cake handoff (kiosk <-> mobile editor)
    # -------------------------------------------------------------------
    @abstractmethod
    def generate_qr_session(self, kiosk_id: str) -> QRSession:
        """Open a short-lived design session and return its QR details."""
        ...

    @abstractmethod
    def poll_session_status(self, session_token: str) -> SessionStatus:
        """Read the current status of a design session."""
        ...

    @abstractmethod
    def complete_customization(self, session_token: str, customization_data: dict) -> None:
        """Store the final customization on a session and mark it complete."""
        ...

    @abstractmethod
    def cancel_session(self, session_token: str) -> None:
        """Cancel a design session."""
        ...

    # -------------------------------------------------------------------
    # Custom cake requests (mobile editor)
    # -------------------------------------------------------------------
    @abstractmethod
    def get_design_options(self) -> DesignOptions:
        """List flavors, sizes, themes and decoration choices."""
        ...

    @abstractmethod
    def save_draft(self, session_token: str | None, design: dict) -> DraftResult:
        """Save a design draft and return its request id."""
        ...

    @abstractmethod
    def submit_for_review(self, request_id: int) -> SubmissionResult:
        """Submit a saved draft for staff review."""
        ...

    # -------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------
    @abstractmethod
    def login_admin(self, username: str, password: str) -> AuthResult:
        """Authenticate an administrator and remember the bearer token."""
        ...

    @abstractmethod
    def login_cashier(self, cashier_code: str, pin: str) -> AuthResult:
        """Authenticate a cashier and remember the bearer token."""
        ...

    @abstractmethod
    def logout(self) -> None:
        """Forget the stored bearer token."""
        ...
