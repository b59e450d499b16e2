"""Support bounded context — consultation bookings and help requests.

Consultations are public lead-capture bookings for the nutrition programs.
Help requests are support tickets raised by signed-in users and answered by
admins.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

support = Domain(name="support")
