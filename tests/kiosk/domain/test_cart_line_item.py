"""Tests for CartLineItem properties, pricing helpers and storage snapshots."""

import pytest
from kiosk.cart import pricing
from kiosk.cart.cart import CartLineItem, MenuItemRef
from protean.exceptions import ValidationError


class TestLineItemProperties:
    def test_selection_ids(self, make_item):
        item = make_item(menu_item_id=7, flavor_id=2, size_id=3)
        assert item.menu_item_id == 7
        assert item.flavor_id == 2
        assert item.size_id == 3

    def test_missing_selections_are_none(self, make_item):
        item = make_item()
        assert item.flavor_id is None
        assert item.size_id is None
        assert item.design is None
        assert item.is_custom_cake is False

    def test_design_is_decoded(self, make_item):
        item = make_item(design={"num_layers": 3})
        assert item.design == {"num_layers": 3}
        assert item.is_custom_cake is True

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            CartLineItem.build(menu_item=MenuItemRef(menu_item_id=1, current_price=10.0), quantity=0)

    def test_build_sets_added_at(self, make_item):
        assert make_item().added_at is not None


class TestPricing:
    def test_unit_price_combines_flavor_and_size(self, make_item):
        item = make_item(price=100.0, flavor_id=1, flavor_cost=20.0, size_id=1, size_multiplier=1.5)
        assert pricing.unit_price(item) == 180.0

    def test_line_total_multiplies_quantity(self, make_item):
        item = make_item(price=45.0, quantity=4)
        assert pricing.line_total(item) == 180.0

    @pytest.mark.parametrize(
        "complexity,surcharge",
        [("simple", 0.0), ("moderate", 50.0), ("complex", 100.0), ("intricate", 200.0)],
    )
    def test_design_surcharges(self, complexity, surcharge):
        assert pricing.design_surcharge({"design_complexity": complexity}) == surcharge

    def test_unknown_or_missing_complexity_has_no_surcharge(self):
        assert pricing.design_surcharge(None) == 0.0
        assert pricing.design_surcharge({}) == 0.0
        assert pricing.design_surcharge({"design_complexity": "baroque"}) == 0.0
        assert pricing.design_surcharge({"design_complexity": 3}) == 0.0

    def test_subtotal_of_nothing_is_zero(self):
        assert pricing.subtotal([]) == 0.0


class TestSnapshots:
    def test_round_trip_keeps_every_field(self, make_item):
        item = make_item(
            menu_item_id=4,
            price=500.0,
            quantity=2,
            flavor_id=1,
            flavor_cost=25.0,
            size_id=2,
            size_multiplier=1.5,
            design={"num_layers": 2, "design_complexity": "complex"},
            special_instructions="Deliver at 3pm",
        )

        restored = CartLineItem.from_snapshot(item.to_snapshot())

        assert restored.to_snapshot() == item.to_snapshot()
        assert pricing.line_total(restored) == pricing.line_total(item)

    def test_snapshot_without_selections(self, make_item):
        snapshot = make_item(menu_item_id=3, price=30.0).to_snapshot()

        assert snapshot["flavor"] is None
        assert snapshot["size"] is None
        assert snapshot["custom_cake_design"] is None
        assert snapshot["menu_item"]["current_price"] == 30.0
