"""Domain events for the HelpRequest aggregate."""

from protean.fields import Boolean, Identifier, String

from support.domain import support


@support.event(part_of="HelpRequest")
class HelpRequestSubmitted:
    """A user raised a support ticket."""

    __version__ = "v1"

    help_request_id = Identifier(required=True)
    requester_id = String(required=True)
    subject = String(required=True)


@support.event(part_of="HelpRequest")
class HelpRequestUpdated:
    """An admin changed the ticket status or replied to it."""

    __version__ = "v1"

    help_request_id = Identifier(required=True)
    status = String(required=True)
    responded = Boolean(default=False)
