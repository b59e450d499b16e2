"""HelpRequest aggregate — a support ticket raised by a signed-in user."""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from support.domain import support


class HelpRequestStatus(Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"


HELP_REQUEST_STATUS_VALUES = [status.value for status in HelpRequestStatus]

DEFAULT_REQUESTER_NAME = "User"


def _now():
    return datetime.now(UTC)


@support.aggregate
class HelpRequest:
    requester_id = String(required=True, max_length=128)
    requester_name = String(max_length=255)
    requester_email = String(max_length=254)
    subject = String(required=True, max_length=255)
    message = Text(required=True)
    status = String(choices=HelpRequestStatus, default=HelpRequestStatus.OPEN.value)
    admin_response = Text()
    created_at = DateTime(default=_now)
    updated_at = DateTime(default=_now)

    @classmethod
    def submit(cls, requester_id, subject, message, requester_name=None, requester_email=None):
        from support.help.events import HelpRequestSubmitted

        now = _now()
        help_request = cls(
            requester_id=requester_id,
            requester_name=requester_name or DEFAULT_REQUESTER_NAME,
            requester_email=requester_email,
            subject=subject,
            message=message,
            created_at=now,
            updated_at=now,
        )
        help_request.raise_(
            HelpRequestSubmitted(
                help_request_id=help_request.id,
                requester_id=requester_id,
                subject=subject,
            )
        )
        return help_request

    def respond(self, status=None, admin_response=None):
        """Record an admin's answer and/or move the ticket along."""
        from support.help.events import HelpRequestUpdated

        if status is None and admin_response is None:
            raise ValidationError({"help_request": ["Nothing to update: provide a status or a response"]})
        if status is not None and status not in HELP_REQUEST_STATUS_VALUES:
            raise ValidationError(
                {"status": ["Invalid status. Must be one of: " + ", ".join(HELP_REQUEST_STATUS_VALUES)]}
            )

        if status is not None:
            self.status = status
        if admin_response is not None:
            self.admin_response = admin_response
        self.updated_at = _now()

        self.raise_(
            HelpRequestUpdated(
                help_request_id=self.id,
                status=self.status,
                responded=bool(self.admin_response),
            )
        )
