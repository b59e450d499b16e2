"""Credential store — the admin and delivery-partner email allow-lists.

The allow-lists live in a small JSON file shaped ``{"admins": [...], "delivery": [...]}``.
The file is read fresh on every lookup so that every worker sees the latest
edits. Writes go through ``mutate_allow_list``, which serializes writers inside
the process and replaces the file atomically: a failed write leaves the
previous file untouched and the error propagates to the caller.

Concurrent writers in *different* processes can still race (read, then later
write); the last writer wins.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from enum import Enum
from pathlib import Path
from typing import Callable

from shared.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PRIMARY_ADMIN_EMAIL = "admin@savourly.in"
DEFAULT_SEED_DELIVERY_EMAIL = "delivery@savourly.in"


class CredentialKind(Enum):
    """Which allow-list an email belongs to."""

    ADMIN = "admin"
    DELIVERY = "delivery"

    @property
    def file_key(self) -> str:
        return "admins" if self is CredentialKind.ADMIN else "delivery"


class CredentialError(Exception):
    """Base class for allow-list errors; carries the HTTP status it maps to."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidCredentialRequest(CredentialError):
    status_code = 400


class ProtectedCredentialError(CredentialError):
    status_code = 403


class DuplicateCredentialError(CredentialError):
    status_code = 409


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def parse_kind(kind: str | CredentialKind | None) -> CredentialKind:
    """Coerce a raw ``type`` value into a ``CredentialKind``."""
    if isinstance(kind, CredentialKind):
        return kind
    try:
        return CredentialKind(kind)
    except ValueError:
        raise InvalidCredentialRequest('type must be "admin" or "delivery", and email is required') from None


def _dedupe(emails) -> list[str]:
    seen: list[str] = []
    for email in emails or []:
        normalized = normalize_email(email)
        if normalized and normalized not in seen:
            seen.append(normalized)
    return seen


class CredentialStore:
    """File-backed admin/delivery allow-lists."""

    def __init__(
        self,
        path: str | Path,
        primary_admin_email: str = DEFAULT_PRIMARY_ADMIN_EMAIL,
        seed_delivery_email: str = DEFAULT_SEED_DELIVERY_EMAIL,
    ) -> None:
        self.path = Path(path)
        self.primary_admin_email = normalize_email(primary_admin_email)
        self.seed_delivery_email = normalize_email(seed_delivery_email)
        self._write_lock = threading.RLock()

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    def load(self) -> dict[str, list[str]]:
        """Return both allow-lists, creating the seeded file when it is missing."""
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            with self._write_lock:
                if not self.path.exists():
                    defaults = {
                        "admins": [self.primary_admin_email],
                        "delivery": [self.seed_delivery_email],
                    }
                    self._write(defaults)
                    logger.info("credentials_initialized", path=str(self.path))
                    return defaults
            raw = json.loads(self.path.read_text(encoding="utf-8"))

        return {
            "admins": _dedupe(raw.get("admins")),
            "delivery": _dedupe(raw.get("delivery")),
        }

    def get_allow_list(self, kind: str | CredentialKind) -> list[str]:
        return self.load()[parse_kind(kind).file_key]

    def is_protected(self, kind: str | CredentialKind, email: str) -> bool:
        return parse_kind(kind) is CredentialKind.ADMIN and normalize_email(email) == self.primary_admin_email

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------
    def mutate_allow_list(
        self,
        kind: str | CredentialKind,
        mutation: Callable[[list[str]], list[str]],
    ) -> dict[str, list[str]]:
        """Apply ``mutation`` to one allow-list and persist the result.

        The read-modify-write cycle runs under the store's lock. ``mutation``
        receives a copy of the current list and returns the new one; raising
        from it aborts the change without touching the file.
        """
        kind = parse_kind(kind)
        with self._write_lock:
            credentials = self.load()
            credentials[kind.file_key] = _dedupe(mutation(list(credentials[kind.file_key])))
            self._write(credentials)
        return credentials

    def add(self, kind: str | CredentialKind, email: str | None) -> dict[str, list[str]]:
        kind = parse_kind(kind)
        normalized = normalize_email(email)
        if not normalized:
            raise InvalidCredentialRequest('type must be "admin" or "delivery", and email is required')

        def _add(emails: list[str]) -> list[str]:
            if normalized in emails:
                raise DuplicateCredentialError("Email already exists")
            return [*emails, normalized]

        credentials = self.mutate_allow_list(kind, _add)
        logger.info("credential_added", kind=kind.value, email=normalized)
        return credentials

    def remove(self, kind: str | CredentialKind, email: str | None) -> dict[str, list[str]]:
        kind = parse_kind(kind)
        normalized = normalize_email(email)
        if not normalized:
            raise InvalidCredentialRequest('type must be "admin" or "delivery", and email is required')
        if self.is_protected(kind, normalized):
            raise ProtectedCredentialError("Cannot remove the primary admin")

        credentials = self.mutate_allow_list(kind, lambda emails: [e for e in emails if e != normalized])
        logger.info("credential_removed", kind=kind.value, email=normalized)
        return credentials

    def _write(self, credentials: dict[str, list[str]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(credentials, handle, indent=2)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise


# ---------------------------------------------------------------------------
# Process-wide store
# ---------------------------------------------------------------------------
_current_store: CredentialStore | None = None


def get_credential_store() -> CredentialStore:
    """Return the active credential store, configured from the environment on first use."""
    global _current_store
    if _current_store is None:
        _current_store = CredentialStore(
            path=os.environ.get("CREDENTIALS_PATH", "credentials.json"),
            primary_admin_email=os.environ.get("PRIMARY_ADMIN_EMAIL", DEFAULT_PRIMARY_ADMIN_EMAIL),
            seed_delivery_email=os.environ.get("SEED_DELIVERY_EMAIL", DEFAULT_SEED_DELIVERY_EMAIL),
        )
    return _current_store


def set_credential_store(store: CredentialStore) -> None:
    """Override the active credential store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_credential_store() -> None:
    """Reset to the environment-configured store."""
    global _current_store
    _current_store = None
