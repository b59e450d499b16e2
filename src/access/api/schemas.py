"""Pydantic request/response schemas for the credential allow-list API."""

from __future__ import annotations

from shared.schemas import CamelModel


class CredentialChangeRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"type": "delivery", "email": "rider@savourly.in"}]}}

    # Validated by the credential store so the error message matches for every shape of bad input
    type: str | None = None
    email: str | None = None


class CredentialsResponse(CamelModel):
    model_config = {
        "json_schema_extra": {"examples": [{"admins": ["admin@savourly.in"], "delivery": ["delivery@savourly.in"]}]}
    }

    admins: list[str]
    delivery: list[str]


class CredentialChangeResponse(CamelModel):
    message: str
    credentials: CredentialsResponse
