"""Consultation booking and follow-up — commands and handlers."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from support.consultation.consultation import Consultation
from support.domain import logger, support


@support.command(part_of="Consultation")
class BookConsultation:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=30)
    program = String(max_length=20)
    preferred_time = String(required=True, max_length=100)


@support.command(part_of="Consultation")
class UpdateConsultationStatus:
    consultation_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@support.command_handler(part_of=Consultation)
class ConsultationHandler:
    @handle(BookConsultation)
    def book_consultation(self, command):
        consultation = Consultation.book(
            name=command.name,
            email=command.email,
            phone=command.phone,
            program=command.program,
            preferred_time=command.preferred_time,
        )
        current_domain.repository_for(Consultation).add(consultation)
        logger.info(
            "consultation_booked",
            consultation_id=str(consultation.id),
            program=consultation.program,
        )
        return consultation

    @handle(UpdateConsultationStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Consultation)
        consultation = repo.find(command.consultation_id)
        if consultation is None:
            raise ObjectNotFoundError("Consultation not found")

        consultation.change_status(command.status)
        repo.add(consultation)
        logger.info("consultation_status_changed", consultation_id=str(consultation.id), status=consultation.status)
        return consultation
