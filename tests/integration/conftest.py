import pytest


@pytest.fixture(autouse=True)
def _reset_domains():
    yield

    from catalogue.domain import catalogue
    from ordering.domain import ordering
    from support.domain import support

    # Clear all databases and drain event stores of every context the app serves
    for domain in (ordering, catalogue, support):
        with domain.domain_context():
            for _, provider in domain.providers.items():
                provider._data_reset()
            domain.event_store.store._data_reset()
