"""Domain events for the Consultation aggregate."""

from protean.fields import Identifier, String

from support.domain import support


@support.event(part_of="Consultation")
class ConsultationBooked:
    """A visitor booked a consultation call."""

    __version__ = "v1"

    consultation_id = Identifier(required=True)
    email = String(required=True)
    program = String(required=True)
    preferred_time = String(required=True)
