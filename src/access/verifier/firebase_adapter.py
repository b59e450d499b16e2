"""Firebase identity verifier (production).

Verifies Firebase ID tokens with the Admin SDK. The SDK app is initialised
from, in order of preference:

- ``FIREBASE_SERVICE_ACCOUNT_JSON``: the service-account JSON as a string
- ``FIREBASE_SERVICE_ACCOUNT``: path to the service-account JSON file
- application default credentials

``FIREBASE_PROJECT_ID`` is passed through as the project id when set.
"""

import json
import os

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError

from access.verifier.port import IdentityVerifier, TokenVerificationError, VerifiedIdentity


def _initialize_app() -> firebase_admin.App:
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    raw_account = os.environ.get("FIREBASE_SERVICE_ACCOUNT_JSON")
    account_path = os.environ.get("FIREBASE_SERVICE_ACCOUNT")
    if raw_account:
        credential = credentials.Certificate(json.loads(raw_account))
    elif account_path:
        credential = credentials.Certificate(account_path)
    else:
        credential = None

    options = {}
    if os.environ.get("FIREBASE_PROJECT_ID"):
        options["projectId"] = os.environ["FIREBASE_PROJECT_ID"]

    return firebase_admin.initialize_app(credential, options or None)


class FirebaseVerifier(IdentityVerifier):
    """Verifies tokens issued by Firebase Authentication."""

    def __init__(self, app: firebase_admin.App | None = None) -> None:
        self.app = app or _initialize_app()

    def verify(self, token: str) -> VerifiedIdentity:
        try:
            decoded = auth.verify_id_token(token, app=self.app)
        except (ValueError, FirebaseError) as exc:
            raise TokenVerificationError(str(exc)) from exc

        return VerifiedIdentity(
            subject_id=decoded["uid"],
            email=decoded.get("email"),
            name=decoded.get("name"),
        )
