"""Helpers for Protean query sets."""


def fetch_all(query) -> list:
    """Return every record matching ``query``.

    Query sets are paginated with a small default page size; size the page to
    the number of matching records so nothing is silently cut off.
    """
    total = query.all().total
    if not total:
        return []
    return query.limit(total).all().items
