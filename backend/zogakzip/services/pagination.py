"""
Zogakzip Backend — Listing Query Builder
==========================================

What:  Offset pagination, sort-key selection and counting for list endpoints.
Who:   GroupService, PostService and CommentService.

Contract:
    page is 1-based (default 1), page_size defaults to 10 and is bounded only
    by the BIGINT range; an offset beyond that range yields an empty page.
    offset = (page - 1) * page_size. Results are ordered by the
    selected column descending with id descending as a tiebreaker, so pages
    are stable when many rows share a counter value.

Query plan (groups, sortBy=mostLiked):
    SELECT ... FROM groups WHERE ... ORDER BY group_like_count DESC, id DESC
    LIMIT :page_size OFFSET :offset
    SELECT count(*) FROM groups WHERE ...
"""

import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple

from sqlalchemy import Select, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from zogakzip.models.base import MAX_BIGINT

DEFAULT_SORT = "latest"


@dataclass(frozen=True)
class PageParams:
    page: int = 1
    page_size: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def total_pages(total_item_count: int, page_size: int) -> int:
    """ceil(total / page_size); 0 when there is nothing to show."""
    return math.ceil(total_item_count / page_size)


def order_clause(sort_by: str, columns: Mapping[str, Any], id_column: Any) -> Tuple[Any, ...]:
    """
    Translate a sortBy key into ORDER BY expressions.

    Unknown keys fall back to "latest", which every mapping must provide.
    """
    column = columns.get(sort_by, columns[DEFAULT_SORT])
    return desc(column), desc(id_column)


async def paginate(
    db: AsyncSession,
    query: Select,
    params: PageParams,
) -> Tuple[List[Any], int]:
    """
    Execute one page of `query` plus a COUNT over the same filters.

    `query` must already carry its WHERE and ORDER BY clauses. The count
    runs as a subquery so it sees exactly the rows the page was cut from.

    Returns:
        (items on this page, total item count)
    """
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await db.execute(count_query)).scalar_one()

    # A page past the BIGINT range cannot hold rows
    if params.offset > MAX_BIGINT:
        return [], total

    page_query = query.offset(params.offset).limit(params.page_size)
    result = await db.execute(page_query)
    return list(result.scalars().all()), total
