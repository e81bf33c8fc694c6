"""
Zogakzip Backend — Listing Query Builder Unit Tests
=====================================================

What we test:
    ✅ Offset math for 1-based pages
    ✅ total_pages rounding, including the empty case
    ✅ sortBy fallback to "latest"
    ✅ Offsets past the BIGINT range return an empty page, not a driver error
"""

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import sqlite

from zogakzip.models.base import MAX_BIGINT
from zogakzip.models.group import Group
from zogakzip.services.group_service import GROUP_SORT_COLUMNS
from zogakzip.services.pagination import PageParams, order_clause, paginate, total_pages


class TestPageParams:

    def test_defaults(self):
        params = PageParams()
        assert params.page == 1
        assert params.page_size == 10
        assert params.offset == 0

    def test_offset_second_page(self):
        assert PageParams(page=2, page_size=10).offset == 10

    def test_offset_large_page_size(self):
        """No upper bound on page size."""
        assert PageParams(page=3, page_size=1000).offset == 2000


class TestTotalPages:

    def test_partial_last_page(self):
        assert total_pages(15, 10) == 2

    def test_exact_multiple(self):
        assert total_pages(20, 10) == 2

    def test_empty(self):
        assert total_pages(0, 10) == 0

    def test_single_item(self):
        assert total_pages(1, 10) == 1


class TestOrderClause:

    def _compile(self, clauses):
        return [str(c.compile(dialect=sqlite.dialect())) for c in clauses]

    def test_known_key(self):
        compiled = self._compile(order_clause("mostLiked", GROUP_SORT_COLUMNS, Group.id))
        assert compiled == ["groups.group_like_count DESC", "groups.id DESC"]

    def test_latest(self):
        compiled = self._compile(order_clause("latest", GROUP_SORT_COLUMNS, Group.id))
        assert compiled[0] == "groups.created_at DESC"

    def test_unknown_key_falls_back_to_latest(self):
        compiled = self._compile(order_clause("alphabetical", GROUP_SORT_COLUMNS, Group.id))
        assert compiled[0] == "groups.created_at DESC"


class TestPaginate:

    @pytest.mark.asyncio
    async def test_offset_past_bigint_range_is_empty(self, db_session):
        db_session.add(Group(name="only", group_password="pw", is_public=True))
        await db_session.flush()

        params = PageParams(page=MAX_BIGINT, page_size=10)
        items, total = await paginate(db_session, select(Group).order_by(Group.id), params)

        assert items == []
        assert total == 1

    @pytest.mark.asyncio
    async def test_page_within_range(self, db_session):
        for i in range(3):
            db_session.add(Group(name=f"g{i}", group_password="pw", is_public=True))
        await db_session.flush()

        params = PageParams(page=2, page_size=2)
        items, total = await paginate(db_session, select(Group).order_by(Group.id), params)

        assert [g.name for g in items] == ["g2"]
        assert total == 3
