"""Shared page/limit contract for list endpoints."""

import math
from typing import List, Tuple

from fastapi import Query
from sqlalchemy.orm import Query as OrmQuery

from schemas.common import Pagination

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class PageParams:
    """Query parameters ``page`` and ``limit`` shared by every list endpoint."""

    def __init__(
        self,
        page: int = Query(DEFAULT_PAGE, ge=1, description="1-based page number"),
        limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Page size"),
    ):
        self.page = page
        self.limit = limit

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total else 0


def paginate(query: OrmQuery, params: PageParams) -> Tuple[List, Pagination]:
    """Apply page/limit to a filtered query.

    The total is counted from the same filtered query with ordering removed,
    so it does not depend on the requested page.

    Args:
        query: Filtered and ordered ORM query.
        params: Page parameters.

    Returns:
        Tuple of (items on the page, pagination metadata).
    """
    total = query.order_by(None).count()
    items = query.offset(params.skip).limit(params.limit).all()
    pagination = Pagination(
        page=params.page,
        limit=params.limit,
        total=total,
        total_pages=total_pages(total, params.limit),
    )
    return items, pagination
