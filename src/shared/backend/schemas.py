"""Pydantic models for backend responses and shared enumerations.

These are the external contracts of the bakery backend. The backend wraps
every payload in a ``{"success", "data", "message"}`` envelope; the models
here describe the ``data`` part only. Unknown fields are ignored.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PaymentMethod(Enum):
    CASH = "cash"
    GCASH = "gcash"
    PAYMAYA = "paymaya"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"


class OrderType(Enum):
    WALK_IN = "walk_in"
    PICKUP = "pickup"
    PRE_ORDER = "pre_order"
    CUSTOM_ORDER = "custom_order"


class OrderSource(Enum):
    KIOSK = "kiosk"
    CASHIER = "cashier"
    ADMIN = "admin"


# Cashless methods require the customer's payment reference number
CASHLESS_PAYMENT_METHODS = frozenset({PaymentMethod.GCASH, PaymentMethod.PAYMAYA})


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class MenuItem(BaseModel):
    menu_item_id: int
    name: str
    description: str | None = None
    item_type: str | None = None
    category_id: int | None = None
    current_price: float = 0.0
    status: str = "available"
    is_infinite_stock: bool = False
    stock_quantity: int = 0
    image_url: str | None = None


class Category(BaseModel):
    category_id: int
    name: str
    description: str | None = None
    image_url: str | None = None


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CreatedOrder(BaseModel):
    order_id: int
    verification_code: str
    order_number: str | None = None
    order_status: str | None = None
    payment_method: str | None = None
    total_amount: float = 0.0
    tax_amount: float = 0.0
    discount_amount: float = 0.0
    final_amount: float = 0.0


# ---------------------------------------------------------------------------
# Custom cake handoff
# ---------------------------------------------------------------------------
class QRSession(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_token: str = Field(alias="sessionToken")
    qr_code_url: str | None = Field(default=None, alias="qrCodeUrl")
    editor_url: str | None = Field(default=None, alias="editorUrl")
    expires_in: int | None = Field(default=None, alias="expiresIn")
    expires_at: str | None = Field(default=None, alias="expiresAt")


class SessionStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Literal["pending", "in_progress", "completed", "expired"]
    customization_data: dict | None = Field(default=None, alias="customizationData")

    @property
    def is_finished(self) -> bool:
        return self.status in ("completed", "expired")


class DesignOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    flavors: list[dict] = Field(default_factory=list)
    sizes: list[dict] = Field(default_factory=list)
    themes: list[dict] = Field(default_factory=list)
    frosting_types: list[str] = Field(default_factory=list, alias="frostingTypes")
    candle_types: list[str] = Field(default_factory=list, alias="candleTypes")
    text_fonts: list[str] = Field(default_factory=list, alias="textFonts")
    text_positions: list[str] = Field(default_factory=list, alias="textPositions")


class DraftResult(BaseModel):
    request_id: int


class SubmissionResult(BaseModel):
    request_id: int
    status: str | None = None
    tracking_code: str | None = None


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------
class AuthResult(BaseModel):
    token: str
    user: dict | None = None
