from app.config.settings import settings
from app.shared.database.models import Seller
from app.shared.query import count_total, parse_query, sort_and_paginate


def test_parse_query_defaults():
    params = parse_query(None)

    assert params.page == 1
    assert params.limit == settings.default_page_size
    assert params.sort_by == "created_at"
    assert params.sort_order == "desc"
    assert params.search == ""
    assert params.offset == 0


def test_parse_query_normalizes_values():
    params = parse_query({"page": "3", "limit": "5", "sortBy": "name", "sortOrder": "ASC", "search": " rosa "})

    assert params.page == 3
    assert params.limit == 5
    assert params.offset == 10
    assert params.sort_by == "name"
    assert params.sort_order == "asc"
    assert params.search == "rosa"


def test_parse_query_clamps_bad_values():
    params = parse_query({"page": "-2", "limit": "100000", "sortOrder": "sideways"})

    assert params.page == 1
    assert params.limit == settings.max_page_size
    assert params.sort_order == "desc"

    assert parse_query({"limit": "abc"}).limit == settings.default_page_size
    assert parse_query({"limit": 0}).limit == settings.default_page_size


def test_sort_falls_back_to_created_at_for_unknown_column(db, user):
    for name in ("b", "a", "c"):
        db.add(Seller(name=name, user_id=user.id))
    db.commit()

    query = db.query(Seller)
    by_name = sort_and_paginate(query, Seller, parse_query({"sortBy": "name", "sortOrder": "asc"})).all()
    unknown = sort_and_paginate(query, Seller, parse_query({"sortBy": "__class__", "sortOrder": "asc"})).all()

    assert [s.name for s in by_name] == ["a", "b", "c"]
    # mismo created_at: desempata por id
    assert [s.name for s in unknown] == ["b", "a", "c"]
    assert count_total(query) == 3
