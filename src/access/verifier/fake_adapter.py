"""In-memory identity verifier for development and testing.

Tokens are issued explicitly with ``issue_token`` and are only accepted by the
verifier instance that issued them. Revoked or unknown tokens fail exactly
like a forged token would with the real provider.
"""

from uuid import uuid4

from access.verifier.port import IdentityVerifier, TokenVerificationError, VerifiedIdentity


class FakeVerifier(IdentityVerifier):
    """Configurable fake identity verifier."""

    def __init__(self) -> None:
        self._tokens: dict[str, VerifiedIdentity] = {}
        self.calls: list[str] = []

    def issue_token(self, subject_id: str, email: str | None = None, name: str | None = None) -> str:
        token = f"fake-{uuid4().hex}"
        self._tokens[token] = VerifiedIdentity(subject_id=subject_id, email=email, name=name)
        return token

    def revoke(self, token: str) -> None:
        self._tokens.pop(token, None)

    def verify(self, token: str) -> VerifiedIdentity:
        self.calls.append(token)
        try:
            return self._tokens[token]
        except KeyError:
            raise TokenVerificationError("Unknown or revoked token") from None
