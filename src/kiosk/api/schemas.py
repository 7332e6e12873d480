"""Pydantic request/response schemas for the Kiosk API.

These are external contracts for the kiosk shell, separate from the
KioskCart aggregate and its value objects.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class FlavorSchema(BaseModel):
    flavor_id: int
    flavor_name: str | None = None
    additional_cost: float = 0.0


class SizeSchema(BaseModel):
    size_id: int
    size_name: str | None = None
    size_multiplier: float = Field(default=1.0, ge=0)


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddCartItemRequest(BaseModel):
    menu_item_id: int
    quantity: int = Field(default=1, ge=1)
    flavor: FlavorSchema | None = None
    size: SizeSchema | None = None
    custom_cake_design: dict | None = None
    special_instructions: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "menu_item_id": 12,
                    "quantity": 2,
                    "flavor": {"flavor_id": 1, "flavor_name": "Chocolate", "additional_cost": 20},
                    "size": {"size_id": 2, "size_name": 'Medium (8")', "size_multiplier": 1.5},
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CheckoutRequest(BaseModel):
    payment_method: str
    order_type: str = "walk_in"
    special_instructions: str | None = None
    reference_number: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"payment_method": "gcash", "order_type": "walk_in", "reference_number": "GC-12345678"},
            ]
        }
    }


class StartHandoffRequest(BaseModel):
    kiosk_id: str | None = None


class AddCustomCakeRequest(BaseModel):
    menu_item_id: int
    quantity: int = Field(default=1, ge=1)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartLineResponse(BaseModel):
    item_id: str
    menu_item_id: int
    name: str | None = None
    quantity: int
    flavor_id: int | None = None
    size_id: int | None = None
    unit_price: float
    line_total: float
    is_custom_cake: bool = False
    custom_cake_design: dict | None = None
    special_instructions: str | None = None


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    item_count: int
    subtotal: float
    tax: float
    total: float


class OrderResponse(BaseModel):
    order_id: int
    verification_code: str
    order_number: str | None = None
    final_amount: float


class MenuItemResponse(BaseModel):
    menu_item_id: int
    name: str
    item_type: str | None = None
    category_id: int | None = None
    current_price: float
    image_url: str | None = None


class HandoffSessionResponse(BaseModel):
    session_token: str
    qr_code_url: str | None = None
    editor_url: str | None = None
    expires_in: int | None = None


class HandoffStatusResponse(BaseModel):
    status: str
    customization_data: dict | None = None
