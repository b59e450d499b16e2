"""Repository for the Order aggregate."""

from ordering.domain import ordering
from ordering.order.order import Order
from shared.queries import fetch_all


@ordering.repository(part_of=Order)
class OrderRepository:
    """Order lookups used by the API and the statistics dashboards.

    The base repository provides ``add`` and ``get``; ``get`` raises on a miss,
    ``find`` returns None instead.
    """

    def find(self, order_id: str) -> Order | None:
        return self._dao.query.filter(order_id=order_id).all().first

    def exists(self, order_id: str) -> bool:
        return self.find(order_id) is not None

    def page(self, status: str | None = None, limit: int = 50, offset: int = 0) -> tuple[list[Order], int]:
        """One page of orders, newest first, plus the size of the filtered set."""
        query = self._dao.query
        if status:
            query = query.filter(status=status)
        results = query.order_by("-placed_at").offset(offset).limit(limit).all()
        return results.items, results.total

    def owned_by(self, owner_id: str) -> list[Order]:
        return fetch_all(self._dao.query.filter(owner_id=owner_id).order_by("-placed_at"))

    def everything(self) -> list[Order]:
        return fetch_all(self._dao.query.order_by("-placed_at"))

    def clear(self) -> int:
        """Delete every order and return how many were removed."""
        orders = self.everything()
        for order in orders:
            self._dao.delete(order)
        return len(orders)
