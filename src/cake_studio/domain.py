"""Cake Studio bounded context — custom cake designs and the design wizard.

A shopper builds a design step by step (on the kiosk or on a phone reached
through the kiosk's QR code); the finished design is submitted to the bakery
backend for staff review and pricing.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

logger = structlog.get_logger(__name__)

cake_studio = Domain(name="cake_studio")
