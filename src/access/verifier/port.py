"""Identity verifier port (abstract interface).

Defines the contract every identity-token verifier must implement, so the
Firebase adapter (production) and the fake adapter (development/tests) can be
swapped without touching the auth dependencies.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class VerifiedIdentity:
    """Claims extracted from a successfully verified identity token."""

    subject_id: str
    email: str | None = None
    name: str | None = None


class TokenVerificationError(Exception):
    """The token is expired, malformed, forged or otherwise not acceptable."""


class IdentityVerifier(ABC):
    """Abstract identity-token verifier."""

    @abstractmethod
    def verify(self, token: str) -> VerifiedIdentity:
        """Verify ``token`` and return its claims.

        Raises ``TokenVerificationError`` when the token cannot be trusted.
        """
        ...
