"""Query helpers shared by the storefront repositories."""

# Protean querysets return one page per call; full reads walk the pages.
PAGE_SIZE = 500


def _query(dao, filters):
    return dao.query.filter(**filters) if filters else dao.query


def fetch_all(dao, order_by="id", **filters) -> list:
    """Return every record matching ``filters``, or every record when none are given."""
    query = _query(dao, filters).order_by(order_by)
    records = []
    offset = 0
    while True:
        page = query.offset(offset).limit(PAGE_SIZE).all()
        records.extend(page.items)
        if not page.has_next:
            return records
        offset += PAGE_SIZE


def fetch_first(dao, order_by, **filters):
    """The first record matching ``filters`` in ``order_by`` order, or None."""
    items = _query(dao, filters).order_by(order_by).limit(1).all().items
    return items[0] if items else None


def exists(dao, **filters) -> bool:
    return bool(_query(dao, filters).limit(1).all().items)
