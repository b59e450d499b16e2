"""Identity verifier factory.

Provides get_verifier() / set_verifier() to swap implementations:
- FakeVerifier for development and testing
- FirebaseVerifier for production

The default adapter is chosen by the IDENTITY_VERIFIER environment variable.
"""

import os

from access.verifier.port import IdentityVerifier

_current_verifier: IdentityVerifier | None = None


def get_verifier() -> IdentityVerifier:
    """Return the configured identity verifier (singleton)."""
    global _current_verifier
    if _current_verifier is None:
        adapter = os.environ.get("IDENTITY_VERIFIER", "fake")
        if adapter == "fake":
            from access.verifier.fake_adapter import FakeVerifier

            _current_verifier = FakeVerifier()
        elif adapter == "firebase":
            from access.verifier.firebase_adapter import FirebaseVerifier

            _current_verifier = FirebaseVerifier()
        else:
            raise ValueError(f"Unknown identity verifier: {adapter}")
    return _current_verifier


def set_verifier(verifier: IdentityVerifier) -> None:
    """Override the active identity verifier (useful for tests)."""
    global _current_verifier
    _current_verifier = verifier


def reset_verifier() -> None:
    """Reset to the environment-configured verifier."""
    global _current_verifier
    _current_verifier = None
