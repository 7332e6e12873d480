"""Pydantic request/response schemas for the Cake Studio API.

These are external contracts (anti-corruption layer) for the mobile editor
and the kiosk's design screens, separate from internal Protean commands.
"""

from datetime import date

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class LayerSchema(BaseModel):
    layer_number: int = Field(ge=1, le=5)
    flavor_id: int | None = None
    size_id: int | None = None


class PositionSchema(BaseModel):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class DecorationSchema(BaseModel):
    decoration_type: str
    position: PositionSchema = Field(default_factory=PositionSchema)
    color: str | None = None
    scale: float = 1.0


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class StartDesignRequest(BaseModel):
    session_token: str | None = None


class UpdateDesignRequest(BaseModel):
    """Partial update; only the fields sent are changed."""

    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    event_type: str | None = None
    event_date: date | None = None
    num_layers: int | None = None
    layers: list[LayerSchema] | None = None
    theme_id: int | None = None
    frosting_type: str | None = None
    frosting_color: str | None = None
    candles_count: int | None = None
    candle_type: str | None = None
    candle_numbers: str | None = None
    cake_text: str | None = None
    text_color: str | None = None
    text_font: str | None = None
    text_position: str | None = None
    decorations_3d: list[DecorationSchema] | None = None
    special_instructions: str | None = None
    dietary_restrictions: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "num_layers": 2,
                    "layers": [
                        {"layer_number": 1, "flavor_id": 1, "size_id": 3},
                        {"layer_number": 2, "flavor_id": 4, "size_id": 2},
                    ],
                    "frosting_type": "fondant",
                    "cake_text": "Happy 30th, Ana!",
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class DesignIdResponse(BaseModel):
    design_id: str


class StepResponse(BaseModel):
    design_id: str
    step: str


class DesignResponse(BaseModel):
    design_id: str
    step: str
    design_complexity: str
    request_id: int | None = None
    last_error: str | None = None
    design: dict


class SubmissionResponse(BaseModel):
    design_id: str
    request_id: int
    status: str | None = None
    tracking_code: str | None = None


class DraftResponse(BaseModel):
    design_id: str
    request_id: int
