"""Domain events for the KioskCart aggregate."""

from protean.fields import Boolean, Identifier, Integer

from kiosk.domain import kiosk


@kiosk.event(part_of="KioskCart")
class CartItemAdded:
    """A menu item was added to the cart, either as a new line or merged into an existing one."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    menu_item_id = Integer(required=True)
    quantity = Integer(required=True)
    flavor_id = Integer()
    size_id = Integer()
    merged = Boolean(default=False)
    is_custom_cake = Boolean(default=False)


@kiosk.event(part_of="KioskCart")
class CartQuantityUpdated:
    """The quantity of every line for a menu item was set explicitly."""

    __version__ = 1

    cart_id = Identifier(required=True)
    menu_item_id = Integer(required=True)
    new_quantity = Integer(required=True)
    lines_updated = Integer(required=True)


@kiosk.event(part_of="KioskCart")
class CartItemRemoved:
    """Every line for a menu item was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    menu_item_id = Integer(required=True)
    lines_removed = Integer(required=True)


@kiosk.event(part_of="KioskCart")
class CartCleared:
    """The cart was emptied, usually after a successful checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    lines_cleared = Integer(required=True)
