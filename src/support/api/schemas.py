"""Pydantic request/response schemas for the Support API."""

from datetime import datetime

from shared.schemas import CamelModel


# ---------------------------------------------------------------------------
# Consultations
# ---------------------------------------------------------------------------
class BookConsultationRequest(CamelModel):
    # Presence is checked by the route so every missing field yields one message
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    program: str | None = None
    preferred_time: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Ravi Kumar",
                    "email": "ravi@example.com",
                    "phone": "+91 99000 11223",
                    "program": "120-day",
                    "preferredTime": "Weekday evenings",
                }
            ]
        }
    }


class ConsultationStatusRequest(CamelModel):
    status: str | None = None


class ConsultationSchema(CamelModel):
    id: str
    name: str
    email: str
    phone: str
    program: str
    preferred_time: str
    status: str
    timestamp: datetime

    @classmethod
    def from_consultation(cls, consultation) -> "ConsultationSchema":
        return cls(
            id=str(consultation.id),
            name=consultation.name,
            email=consultation.email,
            phone=consultation.phone,
            program=consultation.program,
            preferred_time=consultation.preferred_time,
            status=consultation.status,
            timestamp=consultation.booked_at,
        )


class ConsultationBookedResponse(CamelModel):
    message: str = "Consultation booked successfully!"
    consultation: ConsultationSchema


class ConsultationListResponse(CamelModel):
    consultations: list[ConsultationSchema]
    pending_count: int


class ConsultationStatusResponse(CamelModel):
    message: str = "Status updated"
    consultation: ConsultationSchema


# ---------------------------------------------------------------------------
# Help requests
# ---------------------------------------------------------------------------
class HelpRequestSubmission(CamelModel):
    name: str | None = None
    subject: str | None = None
    message: str | None = None


class HelpRequestReply(CamelModel):
    status: str | None = None
    admin_response: str | None = None


class HelpRequestSchema(CamelModel):
    id: str
    user_id: str
    user_name: str | None = None
    user_email: str | None = None
    subject: str
    message: str
    status: str
    admin_response: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_help_request(cls, help_request) -> "HelpRequestSchema":
        return cls(
            id=str(help_request.id),
            user_id=help_request.requester_id,
            user_name=help_request.requester_name,
            user_email=help_request.requester_email,
            subject=help_request.subject,
            message=help_request.message,
            status=help_request.status,
            admin_response=help_request.admin_response,
            created_at=help_request.created_at,
            updated_at=help_request.updated_at,
        )


class HelpRequestUpdatedResponse(CamelModel):
    message: str = "Help request updated"
    help_request: HelpRequestSchema
