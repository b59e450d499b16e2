import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


@pytest.fixture(scope="session")
def support_bed():
    from support.domain import support

    bed = DomainFixture(support)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(support_bed):
    with support_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()


@pytest.fixture()
def book_consultation():
    from support.consultation.consultation import Consultation

    def _book(name="Ravi Kumar", email="ravi@example.com", **details):
        details.setdefault("phone", "+91 99000 11223")
        details.setdefault("preferred_time", "Weekday evenings")
        consultation = Consultation.book(name=name, email=email, **details)
        current_domain.repository_for(Consultation).add(consultation)
        return consultation

    return _book


@pytest.fixture()
def submit_help_request():
    from support.help.help_request import HelpRequest

    def _submit(requester_id="uid-asha", subject="Late delivery", message="My lunch arrived at 3pm", **details):
        help_request = HelpRequest.submit(requester_id=requester_id, subject=subject, message=message, **details)
        current_domain.repository_for(HelpRequest).add(help_request)
        return help_request

    return _submit
