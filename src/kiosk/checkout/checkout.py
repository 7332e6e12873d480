"""Kiosk checkout — turns the cart into a backend order.

The cart is cleared only after the backend has accepted the order. Any
backend failure propagates with the cart left exactly as it was, so the
shopper can retry.
"""

from protean.exceptions import ValidationError

from kiosk.domain import logger
from shared.backend.schemas import CASHLESS_PAYMENT_METHODS, OrderSource, OrderType, PaymentMethod

# Backend totals and cart totals are floats computed by the same formula
TOTAL_TOLERANCE = 0.01


def place_order(
    store,
    backend,
    payment_method,
    order_type=OrderType.WALK_IN.value,
    special_instructions=None,
    reference_number=None,
):
    """Submit the hydrated cart in ``store`` as a kiosk order and clear it on success."""
    try:
        method = PaymentMethod(payment_method)
    except ValueError:
        raise ValidationError({"payment_method": [f"Unknown payment method: {payment_method}"]})

    try:
        kind = OrderType(order_type)
    except ValueError:
        raise ValidationError({"order_type": [f"Unknown order type: {order_type}"]})

    if store.item_count == 0:
        raise ValidationError({"items": ["Cannot check out an empty cart"]})

    if method in CASHLESS_PAYMENT_METHODS and not (reference_number or "").strip():
        raise ValidationError({"reference_number": [f"Reference number is required for {method.value} payments"]})

    cart_total = store.total
    order = backend.create_order(
        items=store.order_items(),
        payment_method=method.value,
        order_type=kind.value,
        order_source=OrderSource.KIOSK.value,
        special_instructions=special_instructions,
        reference_number=reference_number,
    )

    if abs(order.final_amount - cart_total) > TOTAL_TOLERANCE:
        logger.warning(
            "Backend order total differs from cart total",
            order_id=order.order_id,
            cart_total=cart_total,
            backend_total=order.final_amount,
        )

    store.clear()

    logger.info(
        "Kiosk order placed",
        order_id=order.order_id,
        verification_code=order.verification_code,
        payment_method=method.value,
        order_type=kind.value,
    )
    return order
