"""
Unit tests for the job list query builder.
"""
import pytest

from app.core.errors import ValidationFailed
from app.services.job_query import build_job_query


def test_defaults():
    query = build_job_query(owner_id=7)

    assert query.filter.owner_id == 7
    assert query.filter.status is None
    assert query.filter.search is None
    assert query.sort.field == "updatedAt"
    assert query.sort.column == "updated_at"
    assert query.sort.descending is True
    assert query.window.page == 1
    assert query.window.limit == 20
    assert query.window.offset == 0


def test_explicit_parameters():
    query = build_job_query(
        owner_id=7,
        status="interviewing",
        search="  acme ",
        sort_by="applicationDate",
        sort_order="asc",
        page="3",
        limit="25",
    )

    assert query.filter.status == "interviewing"
    assert query.filter.search == "acme"
    assert query.sort.column == "application_date"
    assert query.sort.descending is False
    assert query.window.offset == 50


def test_blank_search_is_ignored():
    assert build_job_query(owner_id=1, search="   ").filter.search is None


@pytest.mark.parametrize("params,field", [
    ({"status": "hired"}, "status"),
    ({"sort_by": "salary"}, "sortBy"),
    ({"sort_order": "up"}, "sortOrder"),
    ({"page": 0}, "page"),
    ({"page": "abc"}, "page"),
    ({"limit": 0}, "limit"),
    ({"limit": 101}, "limit"),
])
def test_invalid_parameters_rejected(params, field):
    with pytest.raises(ValidationFailed) as exc_info:
        build_job_query(owner_id=1, **params)

    assert [e["field"] for e in exc_info.value.errors] == [field]
    assert exc_info.value.status_code == 400


def test_all_errors_reported_together():
    with pytest.raises(ValidationFailed) as exc_info:
        build_job_query(owner_id=1, status="nope", sort_order="sideways", limit=500)

    fields = {e["field"] for e in exc_info.value.errors}
    assert fields == {"status", "sortOrder", "limit"}


def test_limit_bounds_inclusive():
    assert build_job_query(owner_id=1, limit=1).window.limit == 1
    assert build_job_query(owner_id=1, limit=100).window.limit == 100
