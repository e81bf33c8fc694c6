"""
Zogakzip Backend — Post Service
=================================

What:  Business rules for posts (memories) inside groups.
How:   Composes GroupService (owning group lookup), TagService (tag links)
       and the password gate.
Who:   Called by the post route handlers.

Orchestration (POST /api/groups/{groupId}/posts):
    ┌────────────┐   ┌───────────────┐   ┌────────────┐   ┌─────────────────┐
    │ Load group │──▶│ Check group   │──▶│ Insert post│──▶│ Link tags,      │
    │ (404)      │   │ password (401)│   │            │   │ post_count += 1 │
    └────────────┘   └───────────────┘   └────────────┘   └─────────────────┘

Deletion order (DELETE /api/posts/{postId}):
    comments → tag links → post → group.post_count -= 1
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from zogakzip.exceptions import DatabaseError, NotFoundError
from zogakzip.models.comment import Comment
from zogakzip.models.group import Group
from zogakzip.models.post import Post
from zogakzip.models.tag import PostTag, Tag
from zogakzip.schemas.common import MessageResponse, PageResponse, VisibilityResponse
from zogakzip.schemas.post import PostCreate, PostResponse, PostSummary, PostUpdate
from zogakzip.services.access import ensure_public, verify_secret
from zogakzip.services.group_service import group_service
from zogakzip.services.pagination import PageParams, order_clause, paginate, total_pages
from zogakzip.services.tag_service import tag_service

logger = logging.getLogger(__name__)

POST_SORT_COLUMNS = {
    "latest": Post.created_at,
    "mostCommented": Post.comment_count,
    "mostLiked": Post.like_count,
}

_REQUIRED_FIELDS = {"nickname", "title", "content", "is_public"}


def _to_response(post: Post, tags: List[str]) -> PostResponse:
    response = PostResponse.model_validate(post)
    response.tags = tags
    return response


class PostService:
    """
    Business logic layer for post operations.

    Counters:
        Group.post_count and Post.like_count move through single
        `UPDATE ... SET x = x + n` statements so concurrent requests don't
        lose increments.
    """

    async def load_post(self, db: AsyncSession, post_id: int) -> Post:
        """Fetch a post or raise NotFoundError. Shared with CommentService."""
        post = await db.get(Post, post_id)
        if post is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))
        return post

    async def create_post(
        self,
        db: AsyncSession,
        group_id: int,
        data: PostCreate,
    ) -> PostResponse:
        """
        Create a post inside a group.

        Raises:
            NotFoundError: group does not exist (→ 404)
            UnauthorizedError: group_password mismatch (→ 401); nothing is written
        """
        group = await group_service.load_group(db, group_id)
        verify_secret("group", group_id, data.group_password, group.group_password)

        try:
            post = Post(
                group_id=group_id,
                nickname=data.nickname,
                title=data.title,
                content=data.content,
                post_password=data.post_password,
                image_url=data.image_url,
                location=data.location,
                moment=data.moment,
                is_public=data.is_public,
                like_count=0,
                comment_count=0,
            )
            db.add(post)
            await db.flush()

            tags = await tag_service.resolve_tags(db, post.id, data.tags)

            await db.execute(
                update(Group)
                .where(Group.id == group_id)
                .values(post_count=Group.post_count + 1)
            )
        except SQLAlchemyError as e:
            logger.error("Database error creating post in group %s: %s", group_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the post. Please try again.",
                context={"group_id": str(group_id)},
            )

        logger.info("Post %s created in group %s with %d tags", post.id, group_id, len(tags))
        return _to_response(post, tags)

    async def list_posts(
        self,
        db: AsyncSession,
        group_id: int,
        params: PageParams,
        sort_by: str = "latest",
        keyword: Optional[str] = None,
        is_public: Optional[bool] = None,
    ) -> PageResponse[PostSummary]:
        """
        List the posts of one group with offset pagination.

        keyword matches a substring of the title, the content, or any tag.
        """
        await group_service.load_group(db, group_id)

        try:
            query = select(Post).where(Post.group_id == group_id)
            if keyword:
                tagged = (
                    select(PostTag.post_id)
                    .join(Tag, Tag.id == PostTag.tag_id)
                    .where(Tag.content.contains(keyword, autoescape=True))
                )
                query = query.where(
                    or_(
                        Post.title.contains(keyword, autoescape=True),
                        Post.content.contains(keyword, autoescape=True),
                        Post.id.in_(tagged),
                    )
                )
            if is_public is not None:
                query = query.where(Post.is_public == is_public)
            query = query.order_by(*order_clause(sort_by, POST_SORT_COLUMNS, Post.id))

            posts, total = await paginate(db, query, params)
            tags_by_post = await tag_service.get_tags_for_posts(db, [p.id for p in posts])

        except SQLAlchemyError as e:
            logger.error("Database error listing posts of group %s: %s", group_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve posts. Please try again.",
                context={"group_id": str(group_id)},
            )

        items = []
        for post in posts:
            item = PostSummary.model_validate(post)
            item.tags = tags_by_post.get(post.id, [])
            items.append(item)

        return PageResponse[PostSummary](
            current_page=params.page,
            total_pages=total_pages(total, params.page_size),
            total_item_count=total,
            data=items,
        )

    async def get_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        post = await self.load_post(db, post_id)
        ensure_public("post", post_id, post.is_public)
        return _to_response(post, await tag_service.get_tags(db, post_id))

    async def get_private_post(
        self,
        db: AsyncSession,
        post_id: int,
        post_password: str,
    ) -> PostResponse:
        post = await self.load_post(db, post_id)
        verify_secret("post", post_id, post_password, post.post_password)
        return _to_response(post, await tag_service.get_tags(db, post_id))

    async def update_post(
        self,
        db: AsyncSession,
        post_id: int,
        data: PostUpdate,
    ) -> PostResponse:
        """
        Update the fields present in the body.

        When `tags` is present, all existing links are removed and the new
        set is linked; there is no diffing.
        """
        post = await self.load_post(db, post_id)
        verify_secret("post", post_id, data.post_password, post.post_password)

        changes = data.model_dump(exclude_unset=True, exclude={"post_password", "tags"})
        for field, value in changes.items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            setattr(post, field, value)

        try:
            if data.tags is not None:
                tags = await tag_service.replace_tags(db, post_id, data.tags)
            else:
                tags = await tag_service.get_tags(db, post_id)
            await db.flush()
            await db.refresh(post)
        except SQLAlchemyError as e:
            logger.error("Database error updating post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the post. Please try again.",
                context={"post_id": str(post_id)},
            )

        logger.info("Post %s updated: %s", post_id, sorted(changes))
        return _to_response(post, tags)

    async def delete_post(
        self,
        db: AsyncSession,
        post_id: int,
        post_password: str,
    ) -> MessageResponse:
        post = await self.load_post(db, post_id)
        verify_secret("post", post_id, post_password, post.post_password)
        group_id = post.group_id

        try:
            await db.execute(delete(Comment).where(Comment.post_id == post_id))
            await tag_service.delete_links(db, [post_id])
            await db.delete(post)
            await db.flush()
            await db.execute(
                update(Group)
                .where(Group.id == group_id)
                .values(post_count=Group.post_count - 1)
            )
        except SQLAlchemyError as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the post. Please try again.",
                context={"post_id": str(post_id)},
            )

        logger.info("Post %s deleted from group %s", post_id, group_id)
        return MessageResponse(message="Post deleted successfully")

    async def like_post(self, db: AsyncSession, post_id: int) -> MessageResponse:
        """Like a public post; private posts go through like_private_post()."""
        post = await self.load_post(db, post_id)
        ensure_public("post", post_id, post.is_public)
        return await self._increment_likes(db, post_id)

    async def like_private_post(
        self,
        db: AsyncSession,
        post_id: int,
        post_password: str,
    ) -> MessageResponse:
        post = await self.load_post(db, post_id)
        verify_secret("post", post_id, post_password, post.post_password)
        return await self._increment_likes(db, post_id)

    async def _increment_likes(self, db: AsyncSession, post_id: int) -> MessageResponse:
        try:
            await db.execute(
                update(Post)
                .where(Post.id == post_id)
                .values(like_count=Post.like_count + 1)
            )
        except SQLAlchemyError as e:
            logger.error("Database error liking post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not like the post. Please try again.",
                context={"post_id": str(post_id)},
            )
        return MessageResponse(message="Liked the post")

    async def get_visibility(self, db: AsyncSession, post_id: int) -> VisibilityResponse:
        post = await self.load_post(db, post_id)
        return VisibilityResponse(id=post.id, is_public=post.is_public)


post_service = PostService()
