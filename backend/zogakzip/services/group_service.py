"""
Zogakzip Backend — Group Service
==================================

What:  Business rules for groups: create, list, read, update, delete, like.
Who:   Called by the /api/groups route handlers.

Rules:
    - New groups start with group_like_count = 0 and post_count = 0.
    - Missing group → NotFoundError, checked before any password compare.
    - Update and delete require group_password; private reads go through
      get_private_group(), which takes the password.
    - Deleting a group removes, in order: comments of its posts, the posts'
      tag links, the posts, then the group. Tags themselves stay.
"""

import logging
from typing import Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from zogakzip.exceptions import DatabaseError, NotFoundError
from zogakzip.models.comment import Comment
from zogakzip.models.group import Group
from zogakzip.models.post import Post
from zogakzip.schemas.common import MessageResponse, PageResponse, VisibilityResponse
from zogakzip.schemas.group import GroupCreate, GroupResponse, GroupUpdate
from zogakzip.services.access import ensure_public, verify_secret
from zogakzip.services.pagination import PageParams, order_clause, paginate, total_pages
from zogakzip.services.tag_service import tag_service

logger = logging.getLogger(__name__)

# sortBy key → column
GROUP_SORT_COLUMNS = {
    "latest": Group.created_at,
    "mostPosted": Group.post_count,
    "mostLiked": Group.group_like_count,
}

# Columns that may not be set to null through an update
_REQUIRED_FIELDS = {"name", "is_public"}


class GroupService:
    """
    Business logic layer for group operations.

    Error Handling Strategy:
        Application exceptions (NotFoundError, UnauthorizedError,
        ForbiddenError) propagate as-is. SQLAlchemy failures are logged and
        wrapped in DatabaseError so no SQL reaches the client.
    """

    async def load_group(self, db: AsyncSession, group_id: int) -> Group:
        """Fetch a group or raise NotFoundError. Shared with PostService."""
        group = await db.get(Group, group_id)
        if group is None:
            raise NotFoundError(resource="group", resource_id=str(group_id))
        return group

    async def create_group(self, db: AsyncSession, data: GroupCreate) -> GroupResponse:
        try:
            group = Group(
                name=data.name,
                group_password=data.group_password,
                image_url=data.image_url,
                is_public=data.is_public,
                introduction=data.introduction,
                group_like_count=0,
                post_count=0,
            )
            db.add(group)
            await db.flush()  # Assigns id without committing transaction
            logger.info("Group created: %s (public=%s)", group.id, group.is_public)
            return GroupResponse.model_validate(group)

        except SQLAlchemyError as e:
            logger.error("Database error creating group: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the group. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def list_groups(
        self,
        db: AsyncSession,
        params: PageParams,
        sort_by: str = "latest",
        keyword: Optional[str] = None,
        is_public: Optional[bool] = None,
    ) -> PageResponse[GroupResponse]:
        """
        List groups with offset pagination.

        Filters:
            keyword: substring of name or introduction
            is_public: only public (True) or only private (False) groups
        """
        try:
            query = select(Group)
            if keyword:
                query = query.where(
                    or_(
                        Group.name.contains(keyword, autoescape=True),
                        Group.introduction.contains(keyword, autoescape=True),
                    )
                )
            if is_public is not None:
                query = query.where(Group.is_public == is_public)
            query = query.order_by(*order_clause(sort_by, GROUP_SORT_COLUMNS, Group.id))

            groups, total = await paginate(db, query, params)

            return PageResponse[GroupResponse](
                current_page=params.page,
                total_pages=total_pages(total, params.page_size),
                total_item_count=total,
                data=[GroupResponse.model_validate(g) for g in groups],
            )

        except SQLAlchemyError as e:
            logger.error("Database error listing groups: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve groups. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_group(self, db: AsyncSession, group_id: int) -> GroupResponse:
        """Public read; private groups raise ForbiddenError without exposing fields."""
        group = await self.load_group(db, group_id)
        ensure_public("group", group_id, group.is_public)
        return GroupResponse.model_validate(group)

    async def get_private_group(
        self,
        db: AsyncSession,
        group_id: int,
        group_password: str,
    ) -> GroupResponse:
        group = await self.load_group(db, group_id)
        verify_secret("group", group_id, group_password, group.group_password)
        return GroupResponse.model_validate(group)

    async def update_group(
        self,
        db: AsyncSession,
        group_id: int,
        data: GroupUpdate,
    ) -> GroupResponse:
        group = await self.load_group(db, group_id)
        verify_secret("group", group_id, data.group_password, group.group_password)

        changes = data.model_dump(exclude_unset=True, exclude={"group_password"})
        for field, value in changes.items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            setattr(group, field, value)

        try:
            await db.flush()
            await db.refresh(group)
        except SQLAlchemyError as e:
            logger.error("Database error updating group %s: %s", group_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the group. Please try again.",
                context={"group_id": str(group_id)},
            )

        logger.info("Group %s updated: %s", group_id, sorted(changes))
        return GroupResponse.model_validate(group)

    async def delete_group(
        self,
        db: AsyncSession,
        group_id: int,
        group_password: str,
    ) -> MessageResponse:
        """
        Delete a group and everything under it.

        Order matters for foreign keys: comments and tag links reference
        posts, posts reference the group.
        """
        group = await self.load_group(db, group_id)
        verify_secret("group", group_id, group_password, group.group_password)

        try:
            post_ids = list(
                (await db.execute(select(Post.id).where(Post.group_id == group_id))).scalars()
            )
            if post_ids:
                await db.execute(delete(Comment).where(Comment.post_id.in_(post_ids)))
                await tag_service.delete_links(db, post_ids)
                await db.execute(delete(Post).where(Post.group_id == group_id))
            await db.delete(group)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting group %s: %s", group_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the group. Please try again.",
                context={"group_id": str(group_id)},
            )

        logger.info("Group %s deleted with %d posts", group_id, len(post_ids))
        return MessageResponse(message="Group deleted successfully")

    async def like_group(self, db: AsyncSession, group_id: int) -> MessageResponse:
        """Increment group_like_count with a single UPDATE (atomic in the database)."""
        await self.load_group(db, group_id)
        try:
            await db.execute(
                update(Group)
                .where(Group.id == group_id)
                .values(group_like_count=Group.group_like_count + 1)
            )
        except SQLAlchemyError as e:
            logger.error("Database error liking group %s: %s", group_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not like the group. Please try again.",
                context={"group_id": str(group_id)},
            )
        return MessageResponse(message="Liked the group")

    async def get_visibility(self, db: AsyncSession, group_id: int) -> VisibilityResponse:
        group = await self.load_group(db, group_id)
        return VisibilityResponse(id=group.id, is_public=group.is_public)


# ── Singleton Instance ────────────────────────────────────────────────────
group_service = GroupService()
