import pytest
from kiosk.cart.cart import CartLineItem, FlavorSelection, MenuItemRef, SizeSelection
from protean.integrations.pytest import DomainFixture
from shared.backend import set_backend
from shared.backend.fake_adapter import FakeBackend
from shared.backend.schemas import MenuItem
from shared.storage import LocalStorage


@pytest.fixture(scope="session")
def kiosk_bed():
    from kiosk.domain import kiosk

    bed = DomainFixture(kiosk)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(kiosk_bed):
    with kiosk_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def storage(tmp_path):
    return LocalStorage(tmp_path / "kiosk_storage.json")


@pytest.fixture()
def menu_items():
    return [
        MenuItem(menu_item_id=1, name="Chocolate Cake", item_type="cake", category_id=1, current_price=100.0,
                 stock_quantity=5),
        MenuItem(menu_item_id=2, name="Ensaymada", item_type="pastry", category_id=2, current_price=50.0,
                 stock_quantity=20),
        MenuItem(menu_item_id=3, name="Pandesal", item_type="bread", category_id=2, current_price=30.0,
                 stock_quantity=40),
        MenuItem(menu_item_id=4, name="Custom Cake", item_type="custom_cake", category_id=1, current_price=500.0,
                 is_infinite_stock=True),
        MenuItem(menu_item_id=5, name="Ube Roll", item_type="cake", category_id=1, current_price=250.0,
                 status="sold_out", stock_quantity=0),
        MenuItem(menu_item_id=6, name="Brewed Coffee", item_type="beverage", category_id=3, current_price=60.0,
                 stock_quantity=0),
    ]


@pytest.fixture()
def backend(menu_items):
    fake = FakeBackend(menu_items=menu_items)
    set_backend(fake)
    return fake


@pytest.fixture()
def make_item():
    """Factory for cart line items with optional flavor, size and design."""

    def _make(
        menu_item_id=1,
        price=100.0,
        quantity=1,
        flavor_id=None,
        flavor_cost=0.0,
        size_id=None,
        size_multiplier=1.0,
        design=None,
        special_instructions=None,
    ):
        return CartLineItem.build(
            menu_item=MenuItemRef(menu_item_id=menu_item_id, name=f"Item {menu_item_id}", current_price=price),
            quantity=quantity,
            flavor=FlavorSelection(flavor_id=flavor_id, additional_cost=flavor_cost) if flavor_id else None,
            size=SizeSelection(size_id=size_id, size_multiplier=size_multiplier) if size_id else None,
            custom_cake_design=design,
            special_instructions=special_instructions,
        )

    return _make
