"""Cart pricing — mirrors the backend formula so displayed totals match the charge.

Per line: ``(current_price + flavor cost + design surcharge) * size multiplier * quantity``.
"""

# Tax is disabled; change it here and every total follows
TAX_RATE = 0.0

# Client-side estimate only; staff set the real price of a custom cake
DESIGN_COMPLEXITY_SURCHARGES = {
    "simple": 0.0,
    "moderate": 50.0,
    "complex": 100.0,
    "intricate": 200.0,
}


def design_surcharge(design: dict | None) -> float:
    """Surcharge for an embedded custom design, 0 when absent or unrecognized."""
    if not design:
        return 0.0
    complexity = design.get("design_complexity")
    if not isinstance(complexity, str):
        return 0.0
    return DESIGN_COMPLEXITY_SURCHARGES.get(complexity, 0.0)


def unit_price(item) -> float:
    base_price = item.menu_item.current_price or 0.0
    flavor_cost = (item.flavor.additional_cost or 0.0) if item.flavor else 0.0
    size_multiplier = (item.size.size_multiplier or 1.0) if item.size else 1.0
    return (base_price + flavor_cost + design_surcharge(item.design)) * size_multiplier


def line_total(item) -> float:
    return unit_price(item) * item.quantity


def subtotal(items) -> float:
    return sum((line_total(item) for item in items), 0.0)


def tax_for(amount: float) -> float:
    return amount * TAX_RATE
