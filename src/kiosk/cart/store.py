"""Cart store — owns the kiosk's single cart and mirrors it to local storage.

Lifecycle: the store starts UNINITIALIZED with an empty cart and moves to
HYDRATED once ``hydrate()`` has read the stored snapshot. Writes are
suppressed until then, so the empty pre-hydration cart can never overwrite
what a previous session left behind. Mutations made before hydration still
apply in memory and are replaced by the stored snapshot on hydrate.

Storage problems are logged and swallowed: a kiosk keeps selling even when
the disk is unhappy.
"""

import json
from enum import Enum

from protean.exceptions import ValidationError

from kiosk.cart.cart import CartLineItem, KioskCart
from kiosk.domain import logger
from shared.storage import LocalStorage, StorageError

CART_STORAGE_KEY = "goldenmunch_cart"


class StoreLifecycle(Enum):
    UNINITIALIZED = "uninitialized"
    HYDRATED = "hydrated"


class CartStore:
    def __init__(self, storage=None, storage_key=CART_STORAGE_KEY):
        self.storage = storage or LocalStorage()
        self.storage_key = storage_key
        self.state = StoreLifecycle.UNINITIALIZED
        self.cart = KioskCart.create()

    @property
    def is_hydrated(self):
        return self.state == StoreLifecycle.HYDRATED

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def hydrate(self):
        """Load the stored cart, once. Unreadable data leaves the cart empty."""
        if self.is_hydrated:
            return self.cart

        items = []
        try:
            raw = self.storage.get_item(self.storage_key)
            if raw:
                items = [CartLineItem.from_snapshot(entry) for entry in json.loads(raw)]
        except (StorageError, ValueError, KeyError, TypeError, ValidationError) as exc:
            logger.warning("Failed to restore cart from storage", storage_key=self.storage_key, error=str(exc))
            items = []

        self.cart.replace_items(items)
        self.state = StoreLifecycle.HYDRATED
        logger.info("Cart restored from storage", cart_id=str(self.cart.id), lines=len(items))
        return self.cart

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, item):
        self.cart.add_item(item)
        self._persist()

    def remove_item(self, menu_item_id):
        self.cart.remove_item(menu_item_id)
        self._persist()

    def update_quantity(self, menu_item_id, quantity):
        self.cart.update_quantity(menu_item_id, quantity)
        self._persist()

    def clear(self):
        self.cart.clear()
        self._persist()

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @property
    def items(self):
        return list(self.cart.items)

    @property
    def item_count(self):
        return self.cart.item_count

    @property
    def subtotal(self):
        return self.cart.subtotal

    @property
    def tax(self):
        return self.cart.tax

    @property
    def total(self):
        return self.cart.total

    def order_items(self):
        return self.cart.order_items()

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _persist(self):
        self._drain_events()
        if not self.is_hydrated:
            return
        try:
            self.storage.set_item(self.storage_key, json.dumps(self.cart.to_snapshot()))
        except StorageError as exc:
            logger.error("Failed to persist cart", storage_key=self.storage_key, error=str(exc))

    def _drain_events(self):
        for event in self.cart._events:
            logger.info("Cart event", event_type=event.__class__.__name__, cart_id=str(self.cart.id))
        self.cart._events.clear()
