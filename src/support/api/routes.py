"""FastAPI endpoints for the Support domain — consultations and help requests."""

from fastapi import APIRouter, Depends, HTTPException
from protean.utils.globals import current_domain

from access.auth import get_principal, require_admin
from access.principal import Principal
from shared.schemas import MessageResponse
from support.api.schemas import (
    BookConsultationRequest,
    ConsultationBookedResponse,
    ConsultationListResponse,
    ConsultationSchema,
    ConsultationStatusRequest,
    ConsultationStatusResponse,
    HelpRequestReply,
    HelpRequestSchema,
    HelpRequestSubmission,
    HelpRequestUpdatedResponse,
)
from support.consultation.booking import BookConsultation, UpdateConsultationStatus
from support.consultation.consultation import CONSULTATION_STATUS_VALUES, Consultation
from support.help.help_request import HelpRequest
from support.help.tickets import RespondToHelpRequest, SubmitHelpRequest

consultation_router = APIRouter(prefix="/api/consultations", tags=["consultations"])
help_router = APIRouter(prefix="/api/help", tags=["help"])
admin_router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


# --- Public endpoints ---


@consultation_router.post("", status_code=201, response_model=ConsultationBookedResponse)
async def book_consultation(body: BookConsultationRequest) -> ConsultationBookedResponse:
    if not (body.name and body.email and body.phone and body.preferred_time):
        raise HTTPException(status_code=400, detail="Missing required fields")

    command = BookConsultation(
        name=body.name,
        email=body.email,
        phone=body.phone,
        program=body.program,
        preferred_time=body.preferred_time,
    )
    consultation = current_domain.process(command, asynchronous=False)
    return ConsultationBookedResponse(consultation=ConsultationSchema.from_consultation(consultation))


@help_router.post("", status_code=201, response_model=MessageResponse)
async def submit_help_request(
    body: HelpRequestSubmission,
    principal: Principal = Depends(get_principal),
) -> MessageResponse:
    if not (body.subject and body.message):
        raise HTTPException(status_code=400, detail="Missing required fields: subject, message")

    command = SubmitHelpRequest(
        requester_id=principal.subject_id,
        requester_name=body.name or principal.name,
        requester_email=principal.email,
        subject=body.subject,
        message=body.message,
    )
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="Help request submitted")


# --- Admin endpoints ---


@admin_router.get("/consultations", response_model=ConsultationListResponse)
async def list_consultations() -> ConsultationListResponse:
    repo = current_domain.repository_for(Consultation)
    return ConsultationListResponse(
        consultations=[ConsultationSchema.from_consultation(c) for c in repo.newest_first()],
        pending_count=repo.pending_count(),
    )


@admin_router.patch("/consultations/{consultation_id}/status", response_model=ConsultationStatusResponse)
async def update_consultation_status(
    consultation_id: str,
    body: ConsultationStatusRequest,
) -> ConsultationStatusResponse:
    if body.status not in CONSULTATION_STATUS_VALUES:
        raise HTTPException(status_code=400, detail="Invalid status")

    command = UpdateConsultationStatus(consultation_id=consultation_id, status=body.status)
    consultation = current_domain.process(command, asynchronous=False)
    return ConsultationStatusResponse(consultation=ConsultationSchema.from_consultation(consultation))


@admin_router.get("/help", response_model=list[HelpRequestSchema])
async def list_help_requests() -> list[HelpRequestSchema]:
    requests = current_domain.repository_for(HelpRequest).newest_first()
    return [HelpRequestSchema.from_help_request(r) for r in requests]


@admin_router.patch("/help/{help_request_id}", response_model=HelpRequestUpdatedResponse)
async def respond_to_help_request(
    help_request_id: str,
    body: HelpRequestReply,
) -> HelpRequestUpdatedResponse:
    command = RespondToHelpRequest(
        help_request_id=help_request_id,
        status=body.status,
        admin_response=body.admin_response,
    )
    help_request = current_domain.process(command, asynchronous=False)
    return HelpRequestUpdatedResponse(help_request=HelpRequestSchema.from_help_request(help_request))
