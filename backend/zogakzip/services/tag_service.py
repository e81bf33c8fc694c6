"""
Zogakzip Backend — Tag Resolver
=================================

What:  Find-or-create tags and link them to posts.
Who:   Called by PostService on post create, update and delete.

Semantics:
    - Tag strings are matched exactly: no trimming, no case folding.
    - A string repeated within one request is linked once.
    - On post update the links are replaced wholesale (delete all, re-link).
    - Tag rows are never deleted; a tag whose last link is gone stays behind.
    - Reads return tags in whatever order the join yields.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from zogakzip.models.tag import PostTag, Tag

logger = logging.getLogger(__name__)


class TagService:
    """Stateless; every method receives the request's session."""

    async def find_or_create(self, db: AsyncSession, content: str) -> Tag:
        result = await db.execute(select(Tag).where(Tag.content == content))
        tag = result.scalar_one_or_none()
        if tag is None:
            tag = Tag(content=content)
            db.add(tag)
            await db.flush()  # Assigns tag.id
            logger.debug("Created tag %r (id=%s)", content, tag.id)
        return tag

    async def resolve_tags(
        self,
        db: AsyncSession,
        post_id: int,
        tags: Sequence[str],
    ) -> List[str]:
        """
        Ensure every tag exists and link it to the post.

        Returns:
            The distinct tag strings now linked, in first-seen order.
        """
        distinct = list(dict.fromkeys(tags))
        for content in distinct:
            tag = await self.find_or_create(db, content)
            db.add(PostTag(post_id=post_id, tag_id=tag.id))
        if distinct:
            await db.flush()
        return distinct

    async def replace_tags(
        self,
        db: AsyncSession,
        post_id: int,
        tags: Sequence[str],
    ) -> List[str]:
        """Drop every existing link of the post, then link `tags`."""
        await self.delete_links(db, [post_id])
        return await self.resolve_tags(db, post_id, tags)

    async def delete_links(self, db: AsyncSession, post_ids: Iterable[int]) -> None:
        ids = list(post_ids)
        if ids:
            await db.execute(delete(PostTag).where(PostTag.post_id.in_(ids)))

    async def get_tags(self, db: AsyncSession, post_id: int) -> List[str]:
        return (await self.get_tags_for_posts(db, [post_id])).get(post_id, [])

    async def get_tags_for_posts(
        self,
        db: AsyncSession,
        post_ids: Iterable[int],
    ) -> Dict[int, List[str]]:
        """
        Tag strings for many posts in one query.

        Used by the post list so a page of N posts costs one extra query,
        not N.
        """
        ids = list(post_ids)
        tags_by_post: Dict[int, List[str]] = defaultdict(list)
        if not ids:
            return tags_by_post

        result = await db.execute(
            select(PostTag.post_id, Tag.content)
            .join(Tag, Tag.id == PostTag.tag_id)
            .where(PostTag.post_id.in_(ids))
            .order_by(PostTag.post_id, Tag.id)
        )
        for post_id, content in result.all():
            tags_by_post[post_id].append(content)
        return tags_by_post


tag_service = TagService()
