"""Shared BDD fixtures and step definitions for the Kiosk domain."""

import pytest
from kiosk.cart.cart import KioskCart
from kiosk.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup in Then steps
_CART_EVENT_CLASSES = {
    "CartItemAdded": CartItemAdded,
    "CartQuantityUpdated": CartQuantityUpdated,
    "CartItemRemoved": CartItemRemoved,
    "CartCleared": CartCleared,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty kiosk cart", target_fixture="cart")
def empty_cart():
    cart = KioskCart.create()
    cart._events.clear()
    return cart


@given(
    parsers.cfparse("the cart has {qty:d} of menu item {menu_item_id:d} priced {price:f}"),
    target_fixture="cart",
)
def cart_with_item(cart, make_item, qty, menu_item_id, price):
    cart.add_item(make_item(menu_item_id=menu_item_id, price=price, quantity=qty))
    cart._events.clear()
    return cart


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_one_line(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse("the cart holds {count:d} items"))
def cart_holds_n_items(cart, count):
    assert cart.item_count == count


@then(parsers.cfparse("the subtotal is {amount:f}"))
def subtotal_is(cart, amount):
    assert cart.subtotal == pytest.approx(amount)


@then("the total equals the subtotal")
def total_equals_subtotal(cart):
    assert cart.total == cart.subtotal


@then("the cart action fails with a validation error")
def cart_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} cart event is raised"))
def cart_event_raised(cart, event_type):
    event_cls = _CART_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in cart._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in cart._events]}"


@then("no cart event is raised")
def no_cart_event(cart):
    assert cart._events == []
