"""Repository for the HelpRequest aggregate."""

from shared.queries import fetch_all
from support.domain import support
from support.help.help_request import HelpRequest


@support.repository(part_of=HelpRequest)
class HelpRequestRepository:
    def find(self, help_request_id: str) -> HelpRequest | None:
        return self._dao.query.filter(id=help_request_id).all().first

    def newest_first(self) -> list[HelpRequest]:
        return fetch_all(self._dao.query.order_by("-created_at"))
