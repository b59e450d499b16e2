"""FastAPI routes for managing the admin and delivery allow-lists (admin only)."""

from fastapi import APIRouter, Body, Depends

from access.api.schemas import CredentialChangeRequest, CredentialChangeResponse, CredentialsResponse
from access.auth import require_admin
from access.credentials import get_credential_store, parse_kind

credentials_router = APIRouter(
    prefix="/api/admin/credentials",
    tags=["credentials"],
    dependencies=[Depends(require_admin)],
)


@credentials_router.get("", response_model=CredentialsResponse)
async def get_credentials() -> CredentialsResponse:
    return CredentialsResponse(**get_credential_store().load())


@credentials_router.post("", response_model=CredentialChangeResponse)
async def add_credential(body: CredentialChangeRequest) -> CredentialChangeResponse:
    kind = parse_kind(body.type)
    credentials = get_credential_store().add(kind, body.email)
    return CredentialChangeResponse(
        message=f"{kind.value} email added",
        credentials=CredentialsResponse(**credentials),
    )


@credentials_router.delete("", response_model=CredentialChangeResponse)
async def remove_credential(body: CredentialChangeRequest = Body(...)) -> CredentialChangeResponse:
    kind = parse_kind(body.type)
    credentials = get_credential_store().remove(kind, body.email)
    return CredentialChangeResponse(
        message=f"{kind.value} email removed",
        credentials=CredentialsResponse(**credentials),
    )
