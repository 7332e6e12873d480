"""Design wizard steps and the requirement each one enforces before moving on.

Steps run in a fixed order. A step's requirement only gates leaving that
step forward; editing the design is never gated. Requirements read the
design through plain attribute access, so they work on any object shaped
like a CakeDesign.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

# Loose shape check: something@something.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
HEX_COLOR_MESSAGE = "Color must be a hex value like #FFAA00"

MIN_LAYERS = 1
MAX_LAYERS = 5
MAX_CAKE_TEXT_LENGTH = 50


class WizardStep(Enum):
    CUSTOMER_INFO = "CustomerInfo"
    LAYERS = "Layers"
    FLAVOR = "Flavor"
    SIZE = "Size"
    FROSTING = "Frosting"
    TEXT = "Text"
    REVIEW = "Review"
    SUBMITTED = "Submitted"


STEP_ORDER = [
    WizardStep.CUSTOMER_INFO,
    WizardStep.LAYERS,
    WizardStep.FLAVOR,
    WizardStep.SIZE,
    WizardStep.FROSTING,
    WizardStep.TEXT,
    WizardStep.REVIEW,
    WizardStep.SUBMITTED,
]


def next_step(step: WizardStep) -> WizardStep:
    return STEP_ORDER[STEP_ORDER.index(step) + 1]


def previous_step(step: WizardStep) -> WizardStep:
    return STEP_ORDER[STEP_ORDER.index(step) - 1]


# ---------------------------------------------------------------------------
# Requirement checks
# ---------------------------------------------------------------------------
def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _layer(design, layer_number):
    return next((layer for layer in design.layers if layer.layer_number == layer_number), None)


def _check_customer_info(design) -> dict[str, list[str]]:
    errors = {}
    if _blank(design.customer_name):
        errors["customer_name"] = ["Name is required"]
    if _blank(design.customer_email):
        errors["customer_email"] = ["Email is required"]
    elif not EMAIL_PATTERN.match(design.customer_email.strip()):
        errors["customer_email"] = ["Email address is not valid"]
    if _blank(design.customer_phone):
        errors["customer_phone"] = ["Phone number is required"]
    return errors


def _check_layers(design) -> dict[str, list[str]]:
    if design.num_layers is None or not MIN_LAYERS <= design.num_layers <= MAX_LAYERS:
        return {"num_layers": [f"Choose between {MIN_LAYERS} and {MAX_LAYERS} layers"]}
    return {}


def _check_layer_attribute(design, attribute, label) -> dict[str, list[str]]:
    errors = {}
    for number in range(1, (design.num_layers or 0) + 1):
        layer = _layer(design, number)
        if layer is None or getattr(layer, attribute) is None:
            errors[f"layer_{number}_{attribute}"] = [f"Choose a {label} for layer {number}"]
    return errors


def _check_flavor(design) -> dict[str, list[str]]:
    return _check_layer_attribute(design, "flavor_id", "flavor")


def _check_size(design) -> dict[str, list[str]]:
    return _check_layer_attribute(design, "size_id", "size")


def _check_frosting(design) -> dict[str, list[str]]:
    errors = {}
    if _blank(design.frosting_type):
        errors["frosting_type"] = ["Frosting type is required"]
    if _blank(design.frosting_color):
        errors["frosting_color"] = ["Frosting color is required"]
    elif not HEX_COLOR_PATTERN.match(design.frosting_color):
        errors["frosting_color"] = [HEX_COLOR_MESSAGE]
    return errors


def _check_text(design) -> dict[str, list[str]]:
    errors = {}
    if design.cake_text and len(design.cake_text) > MAX_CAKE_TEXT_LENGTH:
        errors["cake_text"] = [f"Cake text cannot exceed {MAX_CAKE_TEXT_LENGTH} characters"]
    if design.text_color and not HEX_COLOR_PATTERN.match(design.text_color):
        errors["text_color"] = [HEX_COLOR_MESSAGE]
    return errors


@dataclass(frozen=True)
class StepRequirement:
    """What a step needs before the wizard may move past it."""

    step: WizardStep
    fields: tuple[str, ...] = ()
    check: Callable[[object], dict[str, list[str]]] = field(default=lambda design: {})

    def missing(self, design) -> dict[str, list[str]]:
        return self.check(design)


STEP_REQUIREMENTS = {
    WizardStep.CUSTOMER_INFO: StepRequirement(
        WizardStep.CUSTOMER_INFO,
        ("customer_name", "customer_email", "customer_phone"),
        _check_customer_info,
    ),
    WizardStep.LAYERS: StepRequirement(WizardStep.LAYERS, ("num_layers",), _check_layers),
    WizardStep.FLAVOR: StepRequirement(WizardStep.FLAVOR, ("layers",), _check_flavor),
    WizardStep.SIZE: StepRequirement(WizardStep.SIZE, ("layers",), _check_size),
    WizardStep.FROSTING: StepRequirement(
        WizardStep.FROSTING,
        ("frosting_type", "frosting_color"),
        _check_frosting,
    ),
    WizardStep.TEXT: StepRequirement(WizardStep.TEXT, ("cake_text",), _check_text),
    WizardStep.REVIEW: StepRequirement(WizardStep.REVIEW),
    WizardStep.SUBMITTED: StepRequirement(WizardStep.SUBMITTED),
}


def missing_fields(design, step: WizardStep) -> dict[str, list[str]]:
    """Field errors that keep ``design`` from leaving ``step``; empty when it may advance."""
    return STEP_REQUIREMENTS[step].missing(design)
