"""Kiosk cart aggregate — the shopper's pending order.

The cart is held in kiosk memory for one shopper session and mirrored to
local storage by CartStore. Lines reference catalog items and carry the
selections that affect the price; the cart never asks the backend for
prices, it computes them with the backend's formula (see kiosk.cart.pricing).

Merge rule: a new line folds into an existing one when both lack a custom
cake design and share (menu_item_id, flavor_id, size_id). Custom cakes are
always separate lines.
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, Float, HasMany, Integer, String, Text, ValueObject

from kiosk.cart import pricing
from kiosk.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from kiosk.domain import kiosk


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@kiosk.value_object(part_of="KioskCart")
class MenuItemRef:
    """The catalog item a line refers to, with the price captured when it was added."""

    menu_item_id = Integer(required=True)
    name = String(max_length=255)
    item_type = String(max_length=50)
    current_price = Float(default=0.0, min_value=0.0)


@kiosk.value_object(part_of="KioskCart")
class FlavorSelection:
    flavor_id = Integer(required=True)
    flavor_name = String(max_length=100)
    additional_cost = Float(default=0.0)


@kiosk.value_object(part_of="KioskCart")
class SizeSelection:
    size_id = Integer(required=True)
    size_name = String(max_length=100)
    size_multiplier = Float(default=1.0, min_value=0.0)


def _menu_item_snapshot(menu_item):
    return {
        "menu_item_id": menu_item.menu_item_id,
        "name": menu_item.name,
        "item_type": menu_item.item_type,
        "current_price": menu_item.current_price,
    }


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@kiosk.entity(part_of="KioskCart")
class CartLineItem:
    """One cart entry: a catalog item, the chosen customizations, and a quantity."""

    menu_item = ValueObject(MenuItemRef, required=True)
    quantity = Integer(required=True, min_value=1)
    flavor = ValueObject(FlavorSelection)
    size = ValueObject(SizeSelection)
    custom_cake_design = Text()  # JSON object: design submission payload
    special_instructions = Text()
    added_at = DateTime()

    @classmethod
    def build(
        cls,
        menu_item,
        quantity=1,
        flavor=None,
        size=None,
        custom_cake_design=None,
        special_instructions=None,
    ):
        return cls(
            menu_item=menu_item,
            quantity=quantity,
            flavor=flavor,
            size=size,
            custom_cake_design=json.dumps(custom_cake_design) if custom_cake_design is not None else None,
            special_instructions=special_instructions,
            added_at=datetime.now(UTC),
        )

    @property
    def menu_item_id(self):
        return self.menu_item.menu_item_id

    @property
    def flavor_id(self):
        return self.flavor.flavor_id if self.flavor else None

    @property
    def size_id(self):
        return self.size.size_id if self.size else None

    @property
    def design(self):
        return json.loads(self.custom_cake_design) if self.custom_cake_design is not None else None

    @property
    def is_custom_cake(self):
        return self.custom_cake_design is not None

    def merges_with(self, other):
        """True when both lines are plain catalog lines with identical selections."""
        if self.is_custom_cake or other.is_custom_cake:
            return False
        return (self.menu_item_id, self.flavor_id, self.size_id) == (
            other.menu_item_id,
            other.flavor_id,
            other.size_id,
        )

    # -------------------------------------------------------------------
    # Snapshots (local storage format)
    # -------------------------------------------------------------------
    def to_snapshot(self):
        return {
            "menu_item": _menu_item_snapshot(self.menu_item),
            "quantity": self.quantity,
            "flavor": (
                {
                    "flavor_id": self.flavor.flavor_id,
                    "flavor_name": self.flavor.flavor_name,
                    "additional_cost": self.flavor.additional_cost,
                }
                if self.flavor
                else None
            ),
            "size": (
                {
                    "size_id": self.size.size_id,
                    "size_name": self.size.size_name,
                    "size_multiplier": self.size.size_multiplier,
                }
                if self.size
                else None
            ),
            "custom_cake_design": self.design,
            "special_instructions": self.special_instructions,
        }

    @classmethod
    def from_snapshot(cls, data):
        flavor = data.get("flavor")
        size = data.get("size")
        return cls.build(
            menu_item=MenuItemRef(**data["menu_item"]),
            quantity=data["quantity"],
            flavor=FlavorSelection(**flavor) if flavor else None,
            size=SizeSelection(**size) if size else None,
            custom_cake_design=data.get("custom_cake_design"),
            special_instructions=data.get("special_instructions"),
        )


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@kiosk.aggregate
class KioskCart:
    """The pending order of the shopper currently at the kiosk."""

    items = HasMany(CartLineItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        now = datetime.now(UTC)
        return cls(created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, item):
        """Add a line, or fold its quantity into a matching plain line."""
        existing = next((line for line in self.items if line.merges_with(item)), None)

        if existing:
            existing.quantity += item.quantity
            item_id = str(existing.id)
        else:
            self.add_items(item)
            item_id = str(item.id)

        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=item_id,
                menu_item_id=item.menu_item_id,
                quantity=item.quantity,
                flavor_id=item.flavor_id,
                size_id=item.size_id,
                merged=existing is not None,
                is_custom_cake=item.is_custom_cake,
            )
        )

    def remove_item(self, menu_item_id):
        """Remove every line for a catalog item. No-op when there is none."""
        matching = [line for line in self.items if line.menu_item_id == menu_item_id]
        if not matching:
            return

        for line in matching:
            self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                menu_item_id=menu_item_id,
                lines_removed=len(matching),
            )
        )

    def update_quantity(self, menu_item_id, quantity):
        """Set the quantity of every line for a catalog item; zero or less removes them."""
        if quantity <= 0:
            self.remove_item(menu_item_id)
            return

        matching = [line for line in self.items if line.menu_item_id == menu_item_id]
        if not matching:
            return

        for line in matching:
            line.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                menu_item_id=menu_item_id,
                new_quantity=quantity,
                lines_updated=len(matching),
            )
        )

    def clear(self):
        lines = list(self.items)
        for line in lines:
            self.remove_items(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), lines_cleared=len(lines)))

    def replace_items(self, items):
        """Swap the whole line collection, e.g. when restoring from storage."""
        for line in list(self.items):
            self.remove_items(line)
        for line in items:
            self.add_items(line)
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Money and projections
    # -------------------------------------------------------------------
    @property
    def item_count(self):
        return sum(line.quantity for line in self.items)

    @property
    def subtotal(self):
        return pricing.subtotal(self.items)

    @property
    def tax(self):
        return pricing.tax_for(self.subtotal)

    @property
    def total(self):
        return self.subtotal + self.tax

    def order_items(self):
        """Backend-facing projection: identifiers, selections and design only."""
        return [
            {
                "menu_item_id": line.menu_item_id,
                "quantity": line.quantity,
                "flavor_id": line.flavor_id,
                "size_id": line.size_id,
                "custom_cake_design": line.design,
                "special_instructions": line.special_instructions,
            }
            for line in self.items
        ]

    def to_snapshot(self):
        return [line.to_snapshot() for line in self.items]
