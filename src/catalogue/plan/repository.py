"""Repository for the Plan aggregate."""

from catalogue.domain import catalogue
from catalogue.plan.plan import Plan
from shared.queries import fetch_all


@catalogue.repository(part_of=Plan)
class PlanRepository:
    def find(self, plan_id: str) -> Plan | None:
        return self._dao.query.filter(id=plan_id).all().first

    def find_by_name(self, name: str) -> Plan | None:
        return self._dao.query.filter(name=name).all().first

    def by_price(self) -> list[Plan]:
        """All plans, cheapest first."""
        return fetch_all(self._dao.query.order_by("price"))

    def is_empty(self) -> bool:
        return self._dao.query.all().total == 0

    def discard(self, plan: Plan) -> None:
        self._dao.delete(plan)
