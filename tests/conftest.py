import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Pins the environment so logging stays quiet and the fake identity verifier is
    used unless a run explicitly asks for another adapter.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("IDENTITY_VERIFIER", "fake")
    os.environ.pop("ORDER_TRANSITION_POLICY", None)
    os.environ.pop("ORDER_TOTAL_POLICY", None)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Access fixtures shared by every context
# ---------------------------------------------------------------------------
ADMIN_EMAIL = "admin@savourly.in"
DELIVERY_EMAIL = "delivery@savourly.in"


@pytest.fixture(autouse=True)
def credential_store(tmp_path):
    """A fresh credentials file per test, seeded with the default accounts."""
    from access.credentials import CredentialStore, reset_credential_store, set_credential_store

    store = CredentialStore(tmp_path / "credentials.json")
    set_credential_store(store)
    yield store
    reset_credential_store()


@pytest.fixture(autouse=True)
def verifier():
    from access.verifier import reset_verifier, set_verifier
    from access.verifier.fake_adapter import FakeVerifier

    fake = FakeVerifier()
    set_verifier(fake)
    yield fake
    reset_verifier()


@pytest.fixture()
def admin_token(verifier):
    return verifier.issue_token("uid-admin", email=ADMIN_EMAIL, name="Savourly Admin")


@pytest.fixture()
def delivery_token(verifier):
    return verifier.issue_token("uid-rider", email=DELIVERY_EMAIL, name="Rider One")


@pytest.fixture()
def customer_token(verifier):
    return verifier.issue_token("uid-asha", email="asha@example.com", name="Asha Rao")


@pytest.fixture()
def other_customer_token(verifier):
    return verifier.issue_token("uid-ravi", email="ravi@example.com", name="Ravi Kumar")


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(admin_token):
    return _bearer(admin_token)


@pytest.fixture()
def delivery_headers(delivery_token):
    return _bearer(delivery_token)


@pytest.fixture()
def customer_headers(customer_token):
    return _bearer(customer_token)


@pytest.fixture()
def other_customer_headers(other_customer_token):
    return _bearer(other_customer_token)
