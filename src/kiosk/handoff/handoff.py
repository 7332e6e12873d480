"""Custom-cake handoff — kiosk opens a design session the shopper continues on a phone.

The kiosk shows the QR code of a fresh session, polls the session until the
phone reports the finished design, then drops that design into the cart as
its own line.
"""

import os

from kiosk.cart.cart import CartLineItem
from kiosk.domain import logger
from kiosk.menu.catalog import menu_item_ref

DEFAULT_KIOSK_ID = "kiosk-1"


def start_handoff(backend, kiosk_id=None):
    """Open a design session for this kiosk and return its QR details."""
    kiosk_id = kiosk_id or os.environ.get("KIOSK_ID", DEFAULT_KIOSK_ID)
    session = backend.generate_qr_session(kiosk_id)
    logger.info("Custom cake handoff started", kiosk_id=kiosk_id, session_token=session.session_token)
    return session


def custom_cake_line_item(menu_item, design_payload, quantity=1):
    """Wrap a completed design into a cart line that will never merge."""
    return CartLineItem.build(
        menu_item=menu_item_ref(menu_item),
        quantity=quantity,
        custom_cake_design=dict(design_payload),
        special_instructions=design_payload.get("special_instructions"),
    )
