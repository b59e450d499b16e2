"""FastAPI dependencies for authentication and role authorization.

``get_principal`` verifies the bearer token on every request (there is no
session state) and resolves the caller's role against the credential store.
``require_roles`` layers a role guard on top of it.
"""

from fastapi import Depends, Header, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from access.credentials import get_credential_store
from access.principal import Principal, Role, has_role, resolve_role
from access.verifier import get_verifier
from access.verifier.port import TokenVerificationError
from shared.logging import get_logger

logger = get_logger(__name__)

_BEARER_PREFIX = "Bearer "


def _extract_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX) :].strip()
    return token or None


async def get_principal(
    request: Request,
    authorization: str | None = Header(default=None),
) -> Principal:
    """Verify the bearer token and attach the resolved principal to the request."""
    token = _extract_token(authorization)
    if token is None:
        raise HTTPException(status_code=401, detail="Unauthorized — no token provided")

    try:
        identity = await run_in_threadpool(get_verifier().verify, token)
    except TokenVerificationError as exc:
        logger.warning("token_verification_failed", reason=str(exc), path=request.url.path)
        raise HTTPException(status_code=401, detail="Unauthorized — invalid token") from exc

    credentials = await run_in_threadpool(get_credential_store().load)
    principal = Principal(
        subject_id=identity.subject_id,
        email=identity.email,
        name=identity.name,
        role=resolve_role(identity.email, credentials["admins"], credentials["delivery"]),
    )
    request.state.principal = principal
    return principal


def require_roles(*roles: Role):
    """Build a dependency that only lets principals with one of ``roles`` through."""
    allowed = frozenset(roles)

    async def _guard(principal: Principal = Depends(get_principal)) -> Principal:
        if not has_role(principal, allowed):
            raise HTTPException(status_code=403, detail="Forbidden — insufficient permissions")
        return principal

    return _guard


require_admin = require_roles(Role.ADMIN)
require_staff = require_roles(Role.ADMIN, Role.DELIVERY)
