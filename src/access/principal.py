"""Principals, roles and the row-level access policy.

A principal's role is a pure function of its verified email and the two
allow-lists; it is recomputed on every request and never cached.
"""

from dataclasses import dataclass
from enum import Enum

from access.credentials import normalize_email


class Role(Enum):
    ADMIN = "admin"
    DELIVERY = "delivery"
    CUSTOMER = "customer"


PRIVILEGED_ROLES = frozenset({Role.ADMIN, Role.DELIVERY})


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of a request."""

    subject_id: str
    email: str | None
    role: Role
    name: str | None = None

    @property
    def is_privileged(self) -> bool:
        return self.role in PRIVILEGED_ROLES


def resolve_role(email: str | None, admin_emails, delivery_emails) -> Role:
    """Admin allow-list wins over delivery; everyone else is a customer."""
    normalized = normalize_email(email)
    if normalized and normalized in {normalize_email(e) for e in admin_emails}:
        return Role.ADMIN
    if normalized and normalized in {normalize_email(e) for e in delivery_emails}:
        return Role.DELIVERY
    return Role.CUSTOMER


def has_role(principal: Principal, allowed_roles) -> bool:
    return principal.role in allowed_roles


def can_view_order(principal: Principal, owner_id: str | None) -> bool:
    """Admins and delivery partners see every order; customers only their own."""
    if principal.is_privileged:
        return True
    return owner_id is not None and owner_id == principal.subject_id
