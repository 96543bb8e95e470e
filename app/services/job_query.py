"""
Query builder for the job application list endpoint.

Turns raw caller parameters into a canonical, validated query shape that
JobStore.query() executes. Invalid parameters are all reported together and
nothing reaches the database.
"""
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from app.core.errors import ValidationFailed, validation_error
from app.db.models.job_application import JOB_STATUSES

SORT_FIELDS = ["createdAt", "updatedAt", "applicationDate", "title", "company"]
SORT_ORDERS = ["asc", "desc"]

DEFAULT_SORT_BY = "updatedAt"
DEFAULT_SORT_ORDER = "desc"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100

# wire name -> model attribute
SORT_COLUMNS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "applicationDate": "application_date",
    "title": "title",
    "company": "company",
}


@dataclass(frozen=True)
class JobFilter:
    owner_id: int
    status: Optional[str] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class SortSpec:
    field: str
    descending: bool = True

    @property
    def column(self) -> str:
        return SORT_COLUMNS[self.field]


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class JobQuery:
    filter: JobFilter
    sort: SortSpec
    window: PageWindow


def _parse_int(value: Union[int, str, None], default: int) -> Optional[int]:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def build_job_query(
    owner_id: int,
    status: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: Any = None,
    limit: Any = None,
) -> JobQuery:
    """
    Validate and normalize list parameters.

    Args:
        owner_id: Authenticated user's id; always part of the filter
        status: Optional status filter (one of JOB_STATUSES)
        search: Optional case-insensitive substring across title, company,
            location and description
        sort_by: createdAt | updatedAt | applicationDate | title | company
        sort_order: asc | desc
        page: 1-based page number
        limit: page size, 1..100

    Raises:
        ValidationFailed: listing every invalid parameter
    """
    errors: List[dict] = []

    if status is not None and status not in JOB_STATUSES:
        errors.append(validation_error("status", f"Status must be one of: {', '.join(JOB_STATUSES)}", status))

    sort_by = sort_by or DEFAULT_SORT_BY
    if sort_by not in SORT_FIELDS:
        errors.append(validation_error("sortBy", f"sortBy must be one of: {', '.join(SORT_FIELDS)}", sort_by))

    sort_order = sort_order or DEFAULT_SORT_ORDER
    if sort_order not in SORT_ORDERS:
        errors.append(validation_error("sortOrder", "sortOrder must be asc or desc", sort_order))

    page_number = _parse_int(page, DEFAULT_PAGE)
    if page_number is None or page_number < 1:
        errors.append(validation_error("page", "Page must be a positive integer", page))

    page_size = _parse_int(limit, DEFAULT_LIMIT)
    if page_size is None or not 1 <= page_size <= MAX_LIMIT:
        errors.append(validation_error("limit", f"Limit must be between 1 and {MAX_LIMIT}", limit))

    if errors:
        raise ValidationFailed(errors)

    search = search.strip() if search else None

    return JobQuery(
        filter=JobFilter(owner_id=owner_id, status=status, search=search or None),
        sort=SortSpec(field=sort_by, descending=sort_order == "desc"),
        window=PageWindow(page=page_number, limit=page_size),
    )
