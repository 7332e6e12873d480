"""Kiosk bounded context — shopping cart, checkout and custom-cake handoff.

The cart lives in kiosk memory and is mirrored to durable local storage; the
bakery backend only ever sees the order-item projection at checkout.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

# Configure logging for the application
configure_logging()

logger = structlog.get_logger(__name__)

# Domain Composition Root
kiosk = Domain(name="kiosk")
