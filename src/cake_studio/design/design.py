"""CakeDesign aggregate (CQRS) — a custom cake being designed through the wizard.

The design is edited freely with partial updates; only moving forward
through the wizard is gated (see cake_studio.design.wizard). The complexity
bucket is recomputed after every update so the kiosk can show an estimate.

Wizard (8 steps):
    CustomerInfo → Layers → Flavor → Size → Frosting → Text → Review → Submitted
    Review → Submitted only through a successful backend submission
    Submitted is terminal; the design is frozen
"""

import json
from datetime import UTC, date, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Date, DateTime, Float, HasMany, Integer, String, Text

from cake_studio.design.complexity import DesignComplexity, estimate_complexity
from cake_studio.design.events import (
    DesignStarted,
    DesignSubmissionFailed,
    DesignSubmitted,
    DesignUpdated,
    WizardStepChanged,
)
from cake_studio.design.wizard import MAX_LAYERS, WizardStep, missing_fields, next_step, previous_step
from cake_studio.domain import cake_studio


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class EventType(Enum):
    BIRTHDAY = "birthday"
    WEDDING = "wedding"
    ANNIVERSARY = "anniversary"
    GRADUATION = "graduation"
    BABY_SHOWER = "baby_shower"
    OTHER = "other"


class FrostingType(Enum):
    BUTTERCREAM = "buttercream"
    FONDANT = "fondant"
    WHIPPED_CREAM = "whipped_cream"
    GANACHE = "ganache"
    CREAM_CHEESE = "cream_cheese"


class CandleType(Enum):
    REGULAR = "regular"
    NUMBER = "number"
    SPARKLER = "sparkler"
    NONE = "none"


class TextFont(Enum):
    SCRIPT = "script"
    BOLD = "bold"
    ELEGANT = "elegant"
    PLAYFUL = "playful"
    MODERN = "modern"


class TextPosition(Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


# Scalar fields a partial update may touch; layers and decorations_3d are handled separately
_SCALAR_FIELDS = frozenset(
    {
        "customer_name",
        "customer_email",
        "customer_phone",
        "event_type",
        "event_date",
        "num_layers",
        "theme_id",
        "frosting_type",
        "frosting_color",
        "candles_count",
        "candle_type",
        "candle_numbers",
        "cake_text",
        "text_color",
        "text_font",
        "text_position",
        "special_instructions",
        "dietary_restrictions",
    }
)
UPDATABLE_FIELDS = _SCALAR_FIELDS | {"layers", "decorations_3d"}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@cake_studio.entity(part_of="CakeDesign")
class CakeLayer:
    """One tier of the cake, numbered from the bottom."""

    layer_number = Integer(required=True, min_value=1, max_value=MAX_LAYERS)
    flavor_id = Integer()
    size_id = Integer()


@cake_studio.entity(part_of="CakeDesign")
class Decoration3D:
    """A decoration placed on the cake in the 3D editor."""

    decoration_type = String(required=True, max_length=50)
    position_x = Float(default=0.0)
    position_y = Float(default=0.0)
    position_z = Float(default=0.0)
    color = String(max_length=20)
    scale = Float(default=1.0, min_value=0.0)

    @classmethod
    def from_dict(cls, data):
        position = data.get("position") or {}
        return cls(
            decoration_type=data["decoration_type"],
            position_x=position.get("x", 0.0),
            position_y=position.get("y", 0.0),
            position_z=position.get("z", 0.0),
            color=data.get("color"),
            scale=data.get("scale", 1.0),
        )

    def to_dict(self):
        return {
            "decoration_type": self.decoration_type,
            "position": {"x": self.position_x, "y": self.position_y, "z": self.position_z},
            "color": self.color,
            "scale": self.scale,
        }


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@cake_studio.aggregate
class CakeDesign:
    """A custom cake design together with where its author is in the wizard."""

    # Customer
    customer_name = String(max_length=255)
    customer_email = String(max_length=254)
    customer_phone = String(max_length=50)
    event_type = String(choices=EventType)
    event_date = Date()

    # Structure
    num_layers = Integer(min_value=1, max_value=MAX_LAYERS, default=1)
    layers = HasMany(CakeLayer)

    # Decoration
    theme_id = Integer()
    frosting_type = String(choices=FrostingType, default=FrostingType.BUTTERCREAM.value)
    frosting_color = String(max_length=7, default="#FFFFFF")
    candles_count = Integer(min_value=0, max_value=100, default=0)
    candle_type = String(choices=CandleType, default=CandleType.REGULAR.value)
    candle_numbers = String(max_length=20)
    cake_text = String(max_length=50)
    text_color = String(max_length=7)
    text_font = String(choices=TextFont)
    text_position = String(choices=TextPosition)
    decorations_3d = HasMany(Decoration3D)

    # Notes
    special_instructions = Text()
    dietary_restrictions = Text()

    # Derived
    design_complexity = String(choices=DesignComplexity, default=DesignComplexity.SIMPLE.value)

    # Wizard and submission
    step = String(choices=WizardStep, default=WizardStep.CUSTOMER_INFO.value)
    session_token = String(max_length=255)
    request_id = Integer()
    last_error = Text()
    submitted_at = DateTime()

    # Timestamps
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def layer_numbers_must_be_unique(self):
        numbers = [layer.layer_number for layer in self.layers]
        if len(numbers) != len(set(numbers)):
            raise ValidationError({"layers": ["Each layer number can appear only once"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def start(cls, session_token=None):
        """Begin a new design with the editor defaults."""
        now = datetime.now(UTC)
        design = cls(
            session_token=session_token,
            created_at=now,
            updated_at=now,
        )
        design.raise_(
            DesignStarted(
                design_id=str(design.id),
                session_token=session_token,
                started_at=now,
            )
        )
        return design

    # -------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------
    def update_design(self, **fields):
        """Shallow-merge ``fields`` into the design.

        ``layers`` entries are merged by ``layer_number``; ``decorations_3d``
        replaces the whole sequence. Unknown fields are rejected.
        """
        if WizardStep(self.step) == WizardStep.SUBMITTED:
            raise ValidationError({"step": ["A submitted design can no longer be changed"]})

        unknown = sorted(set(fields) - UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError({name: ["Unknown design field"] for name in unknown})

        if isinstance(fields.get("event_date"), str):
            try:
                fields["event_date"] = date.fromisoformat(fields["event_date"])
            except ValueError:
                raise ValidationError({"event_date": ["Event date must be YYYY-MM-DD"]})

        layers = fields.pop("layers", None)
        decorations = fields.pop("decorations_3d", None)

        before = self._editable_state()
        try:
            with atomic_change(self):
                for name, value in fields.items():
                    setattr(self, name, value)

                for entry in layers or []:
                    self._merge_layer(entry)

                if decorations is not None:
                    self._replace_decorations(decorations)

                self.design_complexity = estimate_complexity(self).value
                self.updated_at = datetime.now(UTC)
        except ValidationError:
            # A rejected update leaves the design exactly as it was
            self._restore(before, layers_touched=layers is not None, decorations_touched=decorations is not None)
            raise

        changed = sorted(fields)
        if layers is not None:
            changed.append("layers")
        if decorations is not None:
            changed.append("decorations_3d")

        self.raise_(
            DesignUpdated(
                design_id=str(self.id),
                changed_fields=json.dumps(changed),
                design_complexity=self.design_complexity,
            )
        )

    def set_layer(self, layer_number, flavor_id=None, size_id=None):
        """Choose the flavor and/or size of one layer, leaving the other untouched."""
        entry = {"layer_number": layer_number}
        if flavor_id is not None:
            entry["flavor_id"] = flavor_id
        if size_id is not None:
            entry["size_id"] = size_id
        self.update_design(layers=[entry])

    def layer(self, layer_number):
        return next((layer for layer in self.layers if layer.layer_number == layer_number), None)

    def _merge_layer(self, entry):
        layer_number = entry.get("layer_number")
        if layer_number is None:
            raise ValidationError({"layers": ["Each layer needs a layer_number"]})

        existing = self.layer(layer_number)
        if existing is None:
            self.add_layers(
                CakeLayer(
                    layer_number=layer_number,
                    flavor_id=entry.get("flavor_id"),
                    size_id=entry.get("size_id"),
                )
            )
            return

        if "flavor_id" in entry:
            existing.flavor_id = entry["flavor_id"]
        if "size_id" in entry:
            existing.size_id = entry["size_id"]

    def _replace_decorations(self, entries):
        for decoration in list(self.decorations_3d):
            self.remove_decorations_3d(decoration)
        for entry in entries:
            self.add_decorations_3d(Decoration3D.from_dict(entry))

    def _editable_state(self):
        return {
            "scalars": {name: getattr(self, name) for name in _SCALAR_FIELDS | {"design_complexity", "updated_at"}},
            "layers": [(layer.layer_number, layer.flavor_id, layer.size_id) for layer in self.layers],
            "decorations": [decoration.to_dict() for decoration in self.decorations_3d],
        }

    def _restore(self, state, layers_touched, decorations_touched):
        with atomic_change(self):
            for name, value in state["scalars"].items():
                setattr(self, name, value)

            if layers_touched:
                for layer in list(self.layers):
                    self.remove_layers(layer)
                for layer_number, flavor_id, size_id in state["layers"]:
                    self.add_layers(CakeLayer(layer_number=layer_number, flavor_id=flavor_id, size_id=size_id))

            if decorations_touched:
                self._replace_decorations(state["decorations"])

    # -------------------------------------------------------------------
    # Wizard navigation
    # -------------------------------------------------------------------
    def _move_to(self, target):
        current = self.step
        self.step = target.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            WizardStepChanged(
                design_id=str(self.id),
                from_step=current,
                to_step=target.value,
            )
        )

    def advance(self):
        """Move one step forward when the current step's requirement is met."""
        current = WizardStep(self.step)
        if current in (WizardStep.REVIEW, WizardStep.SUBMITTED):
            raise ValidationError({"step": [f"Cannot advance from {current.value}; submit the design instead"]})

        missing = missing_fields(self, current)
        if missing:
            raise ValidationError(missing)

        self._move_to(next_step(current))

    def go_back(self):
        current = WizardStep(self.step)
        if current in (WizardStep.CUSTOMER_INFO, WizardStep.SUBMITTED):
            raise ValidationError({"step": [f"Cannot go back from {current.value}"]})

        self._move_to(previous_step(current))

    # -------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------
    def _assert_at_review(self):
        if WizardStep(self.step) != WizardStep.REVIEW:
            raise ValidationError({"step": [f"Design must be at Review to be submitted, not {self.step}"]})

    def record_draft(self, request_id):
        """Remember the backend draft; the first id handed out is kept."""
        if self.request_id is None:
            self.request_id = request_id
            self.updated_at = datetime.now(UTC)

    def mark_submitted(self, request_id):
        self._assert_at_review()

        now = datetime.now(UTC)
        with atomic_change(self):
            self.request_id = request_id
            self.last_error = None
            self.submitted_at = now
            self.updated_at = now

        self._move_to(WizardStep.SUBMITTED)

        self.raise_(
            DesignSubmitted(
                design_id=str(self.id),
                request_id=request_id,
                design_complexity=self.design_complexity,
                submitted_at=now,
            )
        )

    def record_submission_failure(self, reason):
        """Keep the design at Review with the reason, so the shopper can retry."""
        self._assert_at_review()

        now = datetime.now(UTC)
        self.last_error = reason
        self.updated_at = now

        self.raise_(
            DesignSubmissionFailed(
                design_id=str(self.id),
                reason=reason,
                failed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Projection
    # -------------------------------------------------------------------
    def to_submission_payload(self):
        """A fresh snapshot in the backend's flat request format."""
        payload = {
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "event_type": self.event_type,
            "event_date": self.event_date.isoformat() if self.event_date else None,
            "num_layers": self.num_layers,
        }

        for number in range(1, self.num_layers + 1):
            layer = self.layer(number)
            payload[f"layer_{number}_flavor_id"] = layer.flavor_id if layer else None
            payload[f"layer_{number}_size_id"] = layer.size_id if layer else None

        payload.update(
            {
                "theme_id": self.theme_id,
                "frosting_type": self.frosting_type,
                "frosting_color": self.frosting_color,
                "candles_count": self.candles_count,
                "candle_type": self.candle_type,
                "candle_numbers": self.candle_numbers,
                "cake_text": self.cake_text,
                "text_color": self.text_color,
                "text_font": self.text_font,
                "text_position": self.text_position,
                "decorations_3d": [decoration.to_dict() for decoration in self.decorations_3d],
                "special_instructions": self.special_instructions,
                "dietary_restrictions": self.dietary_restrictions,
                "design_complexity": self.design_complexity,
            }
        )
        return payload
