import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


@pytest.fixture(scope="session")
def catalogue_bed():
    from catalogue.domain import catalogue

    bed = DomainFixture(catalogue)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed):
    with catalogue_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()


@pytest.fixture()
def create_plan():
    """Create and persist a plan directly through the aggregate."""
    from catalogue.plan.plan import Plan

    def _create(name="Gold Plan", price=1500.0, **details):
        plan = Plan.create(name=name, price=price, **details)
        current_domain.repository_for(Plan).add(plan)
        return plan

    return _create
