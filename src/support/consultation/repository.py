"""Repository for the Consultation aggregate."""

from shared.queries import fetch_all
from support.consultation.consultation import Consultation, ConsultationStatus
from support.domain import support


@support.repository(part_of=Consultation)
class ConsultationRepository:
    def find(self, consultation_id: str) -> Consultation | None:
        return self._dao.query.filter(id=consultation_id).all().first

    def newest_first(self) -> list[Consultation]:
        return fetch_all(self._dao.query.order_by("-booked_at"))

    def pending_count(self) -> int:
        return self._dao.query.filter(status=ConsultationStatus.PENDING.value).all().total
