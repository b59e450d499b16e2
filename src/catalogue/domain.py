"""Catalogue bounded context — the meal plans sold on the storefront.

Plans are curated by admins and listed publicly. Orders copy a plan's name and
price at checkout, so nothing here is referenced by the ordering context.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

catalogue = Domain(name="catalogue")
