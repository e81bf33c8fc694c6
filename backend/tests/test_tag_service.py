"""
Zogakzip Backend — Tag Resolver Tests
=======================================

What we test:
    ✅ Find-or-create is idempotent across posts
    ✅ Duplicates inside one request are linked once
    ✅ Replace drops every old link; orphaned tags survive
    ✅ Strings are matched exactly (no trimming or case folding)
"""

import pytest
from sqlalchemy import func, select

from zogakzip.models.group import Group
from zogakzip.models.post import Post
from zogakzip.models.tag import PostTag, Tag
from zogakzip.services.tag_service import TagService


async def _make_post(db, group_id=None, title="post"):
    if group_id is None:
        group = Group(name="g", group_password="pw")
        db.add(group)
        await db.flush()
        group_id = group.id
    post = Post(
        group_id=group_id,
        nickname="n",
        title=title,
        content="c",
        post_password="pw",
    )
    db.add(post)
    await db.flush()
    return post


async def _count(db, model):
    return await db.scalar(select(func.count()).select_from(model))


class TestResolveTags:

    def setup_method(self):
        self.service = TagService()

    @pytest.mark.asyncio
    async def test_creates_tags_and_links(self, db_session):
        post = await _make_post(db_session)

        linked = await self.service.resolve_tags(db_session, post.id, ["beach", "sunset"])

        assert linked == ["beach", "sunset"]
        assert await _count(db_session, Tag) == 2
        assert await _count(db_session, PostTag) == 2

    @pytest.mark.asyncio
    async def test_same_tag_on_two_posts_is_one_row(self, db_session):
        first = await _make_post(db_session)
        second = await _make_post(db_session, group_id=first.group_id, title="second")

        await self.service.resolve_tags(db_session, first.id, ["travel"])
        await self.service.resolve_tags(db_session, second.id, ["travel"])

        assert await _count(db_session, Tag) == 1
        assert await _count(db_session, PostTag) == 2

    @pytest.mark.asyncio
    async def test_duplicates_in_one_request_link_once(self, db_session):
        post = await _make_post(db_session)

        linked = await self.service.resolve_tags(db_session, post.id, ["a", "b", "a"])

        assert linked == ["a", "b"]
        assert await _count(db_session, PostTag) == 2

    @pytest.mark.asyncio
    async def test_empty_list(self, db_session):
        post = await _make_post(db_session)

        assert await self.service.resolve_tags(db_session, post.id, []) == []
        assert await _count(db_session, PostTag) == 0

    @pytest.mark.asyncio
    async def test_strings_are_not_normalized(self, db_session):
        post = await _make_post(db_session)

        await self.service.resolve_tags(db_session, post.id, ["Travel", "travel", "travel "])

        assert await _count(db_session, Tag) == 3


class TestReplaceAndRead:

    def setup_method(self):
        self.service = TagService()

    @pytest.mark.asyncio
    async def test_replace_is_wholesale(self, db_session):
        post = await _make_post(db_session)
        await self.service.resolve_tags(db_session, post.id, ["old", "kept"])

        linked = await self.service.replace_tags(db_session, post.id, ["kept", "new"])

        assert linked == ["kept", "new"]
        assert sorted(await self.service.get_tags(db_session, post.id)) == ["kept", "new"]
        # "old" lost its last link but the tag row stays
        assert await _count(db_session, Tag) == 3

    @pytest.mark.asyncio
    async def test_get_tags_for_posts_batches(self, db_session):
        first = await _make_post(db_session)
        second = await _make_post(db_session, group_id=first.group_id, title="second")
        third = await _make_post(db_session, group_id=first.group_id, title="third")
        await self.service.resolve_tags(db_session, first.id, ["x", "y"])
        await self.service.resolve_tags(db_session, second.id, ["y"])

        tags = await self.service.get_tags_for_posts(db_session, [first.id, second.id, third.id])

        assert sorted(tags[first.id]) == ["x", "y"]
        assert tags[second.id] == ["y"]
        assert tags.get(third.id, []) == []

    @pytest.mark.asyncio
    async def test_delete_links_keeps_tags(self, db_session):
        post = await _make_post(db_session)
        await self.service.resolve_tags(db_session, post.id, ["memory"])

        await self.service.delete_links(db_session, [post.id])

        assert await _count(db_session, PostTag) == 0
        assert await _count(db_session, Tag) == 1
