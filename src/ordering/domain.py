"""Ordering bounded context — meal-plan orders.

Handles order placement at checkout, the delivery status lifecycle driven by
admins and delivery partners, and the order statistics dashboards.
"""

import structlog
from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
