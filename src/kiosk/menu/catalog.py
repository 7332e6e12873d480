"""Menu availability — what the kiosk offers for sale right now."""

from kiosk.cart.cart import MenuItemRef
from kiosk.domain import logger
from shared.backend.schemas import MenuItem


def is_orderable(item: MenuItem) -> bool:
    """Available items with stock on hand, or items that never run out."""
    return item.status == "available" and (item.is_infinite_stock or item.stock_quantity > 0)


def load_menu(backend, category_id: int | None = None) -> list[MenuItem]:
    items = backend.get_menu_items(category_id=category_id)
    orderable = [item for item in items if is_orderable(item)]
    logger.debug("Menu loaded", category_id=category_id, total=len(items), orderable=len(orderable))
    return orderable


def menu_item_ref(item: MenuItem) -> MenuItemRef:
    """Freeze the catalog fields a cart line needs, including today's price."""
    return MenuItemRef(
        menu_item_id=item.menu_item_id,
        name=item.name,
        item_type=item.item_type,
        current_price=item.current_price,
    )
