"""Tests for KioskCart line management, merging and money figures."""

from kiosk.cart.cart import KioskCart
from kiosk.cart.pricing import TAX_RATE


class TestCartCreation:
    def test_create_starts_empty(self):
        cart = KioskCart.create()
        assert len(cart.items) == 0
        assert cart.item_count == 0
        assert cart.subtotal == 0.0

    def test_create_sets_timestamps(self):
        cart = KioskCart.create()
        assert cart.created_at is not None
        assert cart.updated_at is not None

    def test_create_generates_id(self):
        cart = KioskCart.create()
        assert cart.id is not None


class TestAddItem:
    def test_add_new_line(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=1, quantity=2))

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2

    def test_identical_selections_merge_into_one_line(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=1, quantity=1, flavor_id=2, size_id=3))
        cart.add_item(make_item(menu_item_id=1, quantity=2, flavor_id=2, size_id=3))
        cart.add_item(make_item(menu_item_id=1, quantity=4, flavor_id=2, size_id=3))

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 7

    def test_different_flavor_is_a_separate_line(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=1, flavor_id=1))
        cart.add_item(make_item(menu_item_id=1, flavor_id=2))

        assert len(cart.items) == 2

    def test_different_size_is_a_separate_line(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=1, size_id=1))
        cart.add_item(make_item(menu_item_id=1, size_id=2))

        assert len(cart.items) == 2

    def test_no_selection_and_a_selection_do_not_merge(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=1))
        cart.add_item(make_item(menu_item_id=1, flavor_id=1))

        assert len(cart.items) == 2

    def test_custom_designs_always_get_their_own_line(self, make_item):
        design = {"num_layers": 2, "design_complexity": "moderate"}
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=4, design=design))
        cart.add_item(make_item(menu_item_id=4, design=design))

        assert len(cart.items) == 2
        assert all(line.quantity == 1 for line in cart.items)

    def test_plain_line_does_not_merge_into_custom_line(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=4, design={"num_layers": 1}))
        cart.add_item(make_item(menu_item_id=4))

        assert len(cart.items) == 2

    def test_empty_design_still_counts_as_custom_cake(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=4))
        cart.add_item(make_item(menu_item_id=4, design={}))

        assert len(cart.items) == 2
        assert [item["custom_cake_design"] for item in cart.order_items()] == [None, {}]
        assert [item["quantity"] for item in cart.order_items()] == [1, 1]

    def test_lines_keep_insertion_order(self, make_item):
        cart = KioskCart.create()
        for menu_item_id in (3, 1, 2):
            cart.add_item(make_item(menu_item_id=menu_item_id))

        assert [line.menu_item_id for line in cart.items] == [3, 1, 2]


class TestRemoveItem:
    def test_remove_every_line_for_the_item(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=1, flavor_id=1))
        cart.add_item(make_item(menu_item_id=1, flavor_id=2))
        cart.add_item(make_item(menu_item_id=2))

        cart.remove_item(1)

        assert [line.menu_item_id for line in cart.items] == [2]

    def test_remove_absent_item_is_a_noop(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=1))
        cart._events.clear()

        cart.remove_item(99)

        assert len(cart.items) == 1
        assert cart._events == []


class TestUpdateQuantity:
    def test_sets_quantity_on_every_matching_line(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=1, flavor_id=1, quantity=1))
        cart.add_item(make_item(menu_item_id=1, flavor_id=2, quantity=3))

        cart.update_quantity(1, 5)

        assert [line.quantity for line in cart.items] == [5, 5]

    def test_zero_behaves_like_remove(self, make_item):
        removed = KioskCart.create()
        updated = KioskCart.create()
        for cart in (removed, updated):
            cart.add_item(make_item(menu_item_id=1))
            cart.add_item(make_item(menu_item_id=2, quantity=3))

        removed.remove_item(1)
        updated.update_quantity(1, 0)

        assert [(line.menu_item_id, line.quantity) for line in updated.items] == [
            (line.menu_item_id, line.quantity) for line in removed.items
        ]

    def test_negative_quantity_removes(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=1))

        cart.update_quantity(1, -2)

        assert len(cart.items) == 0


class TestClear:
    def test_clear_empties_the_cart(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=1))
        cart.add_item(make_item(menu_item_id=2))

        cart.clear()

        assert len(cart.items) == 0
        assert cart.item_count == 0


class TestMoney:
    def test_flavor_and_size_pricing(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(price=100.0, flavor_id=1, flavor_cost=20.0, size_id=2, size_multiplier=1.5, quantity=2))

        assert cart.subtotal == 360.0

    def test_mixed_cart_count_and_subtotal(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=1, price=50.0, quantity=1))
        cart.add_item(make_item(menu_item_id=2, price=30.0, size_id=1, size_multiplier=2.0, quantity=2))

        assert cart.item_count == 3
        assert cart.subtotal == 170.0

    def test_complex_design_adds_100_per_unit_before_scaling(self, make_item):
        plain = KioskCart.create()
        plain.add_item(make_item(menu_item_id=4, price=100.0))
        designed = KioskCart.create()
        designed.add_item(make_item(menu_item_id=4, price=100.0, design={"design_complexity": "complex"}))

        assert designed.subtotal - plain.subtotal == 100.0

    def test_design_surcharge_is_scaled_by_size(self, make_item):
        cart = KioskCart.create()
        cart.add_item(
            make_item(price=100.0, size_id=1, size_multiplier=1.5, design={"design_complexity": "complex"})
        )

        assert cart.subtotal == 300.0

    def test_total_is_subtotal_plus_tax(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(price=80.0, quantity=3))

        assert cart.tax == cart.subtotal * TAX_RATE
        assert cart.total == cart.subtotal + cart.subtotal * TAX_RATE

    def test_tax_is_disabled(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(price=80.0, quantity=3))

        assert TAX_RATE == 0.0
        assert cart.total == cart.subtotal


class TestOrderItems:
    def test_projection_carries_identifiers_and_selections(self, make_item):
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=1, quantity=2, flavor_id=3, size_id=4, special_instructions="No nuts"))

        assert cart.order_items() == [
            {
                "menu_item_id": 1,
                "quantity": 2,
                "flavor_id": 3,
                "size_id": 4,
                "custom_cake_design": None,
                "special_instructions": "No nuts",
            }
        ]

    def test_projection_embeds_custom_design(self, make_item):
        design = {"num_layers": 2, "layer_1_flavor_id": 1, "design_complexity": "moderate"}
        cart = KioskCart.create()
        cart.add_item(make_item(menu_item_id=4, design=design))

        assert cart.order_items()[0]["custom_cake_design"] == design
        assert cart.order_items()[0]["flavor_id"] is None
