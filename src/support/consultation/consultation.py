"""Consultation aggregate — a booked call with a nutritionist."""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from support.domain import support


class ConsultationProgram(Enum):
    NINETY_DAY = "90-day"
    HUNDRED_TWENTY_DAY = "120-day"
    OTHER = "other"


class ConsultationStatus(Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


CONSULTATION_STATUS_VALUES = [status.value for status in ConsultationStatus]


def _now():
    return datetime.now(UTC)


@support.aggregate
class Consultation:
    """A consultation request left by a visitor, followed up by an admin."""

    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=30)
    program = String(choices=ConsultationProgram, default=ConsultationProgram.NINETY_DAY.value)
    preferred_time = String(required=True, max_length=100)
    status = String(choices=ConsultationStatus, default=ConsultationStatus.PENDING.value)
    booked_at = DateTime(default=_now)

    @classmethod
    def book(cls, name, email, phone, preferred_time, program=None):
        from support.consultation.events import ConsultationBooked

        consultation = cls(
            name=name.strip(),
            email=email.strip().lower(),
            phone=phone.strip(),
            program=program or ConsultationProgram.NINETY_DAY.value,
            preferred_time=preferred_time,
            booked_at=_now(),
        )
        consultation.raise_(
            ConsultationBooked(
                consultation_id=consultation.id,
                email=consultation.email,
                program=consultation.program,
                preferred_time=consultation.preferred_time,
            )
        )
        return consultation

    def change_status(self, status):
        if status not in CONSULTATION_STATUS_VALUES:
            raise ValidationError({"status": ["Invalid status"]})
        self.status = status
