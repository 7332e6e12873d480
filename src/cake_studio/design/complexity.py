"""Design complexity estimate — the bucket the kiosk uses to pre-price a custom cake.

Score points per feature, then bucket: <=2 simple, <=5 moderate, <=8 complex,
anything above intricate. Staff still quote the real price after review.
"""

from dataclasses import dataclass, field
from enum import Enum


class DesignComplexity(Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    INTRICATE = "intricate"


_LAYER_POINTS = {1: 0, 2: 1, 3: 2}
_FROSTING_POINTS = {"fondant": 2, "ganache": 1}

LONG_TEXT_LENGTH = 50
LONG_INSTRUCTIONS_LENGTH = 50
MANY_DECORATIONS = 5


@dataclass
class ComplexityAssessment:
    score: int = 0
    factors: list[str] = field(default_factory=list)

    def add(self, points: int, factor: str) -> None:
        self.score += points
        self.factors.append(factor)

    @property
    def level(self) -> DesignComplexity:
        if self.score <= 2:
            return DesignComplexity.SIMPLE
        if self.score <= 5:
            return DesignComplexity.MODERATE
        if self.score <= 8:
            return DesignComplexity.COMPLEX
        return DesignComplexity.INTRICATE


def assess_complexity(design) -> ComplexityAssessment:
    assessment = ComplexityAssessment()

    layers = design.num_layers or 1
    assessment.add(_LAYER_POINTS.get(layers, 3), f"{layers} layer(s)")

    if design.frosting_type in _FROSTING_POINTS:
        assessment.add(_FROSTING_POINTS[design.frosting_type], f"{design.frosting_type} frosting")

    if design.cake_text:
        if len(design.cake_text) > LONG_TEXT_LENGTH:
            assessment.add(2, "Long text message")
        else:
            assessment.add(1, "Custom text")

    decoration_count = len(design.decorations_3d or [])
    if decoration_count > MANY_DECORATIONS:
        assessment.add(3, f"{decoration_count} 3D decorations (extensive)")
    elif decoration_count:
        assessment.add(decoration_count, f"{decoration_count} 3D decoration(s)")

    if design.theme_id:
        assessment.add(1, "Themed design")

    if design.special_instructions and len(design.special_instructions) > LONG_INSTRUCTIONS_LENGTH:
        assessment.add(1, "Complex special instructions")

    if design.dietary_restrictions:
        assessment.add(1, "Special dietary requirements")

    return assessment


def estimate_complexity(design) -> DesignComplexity:
    return assess_complexity(design).level
