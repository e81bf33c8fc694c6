"""
Zogakzip Backend — Comment Service
====================================

What:  Create, list, update and delete comments on posts.
Rules: every comment has its own password for edit/delete; creating and
       deleting a comment moves the parent post's comment_count by one.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from zogakzip.exceptions import DatabaseError, NotFoundError
from zogakzip.models.comment import Comment
from zogakzip.models.post import Post
from zogakzip.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from zogakzip.schemas.common import MessageResponse, PageResponse
from zogakzip.services.access import verify_secret
from zogakzip.services.pagination import PageParams, paginate, total_pages
from zogakzip.services.post_service import post_service

logger = logging.getLogger(__name__)


class CommentService:

    async def load_comment(self, db: AsyncSession, comment_id: int) -> Comment:
        comment = await db.get(Comment, comment_id)
        if comment is None:
            raise NotFoundError(resource="comment", resource_id=str(comment_id))
        return comment

    async def create_comment(
        self,
        db: AsyncSession,
        post_id: int,
        data: CommentCreate,
    ) -> CommentResponse:
        await post_service.load_post(db, post_id)

        try:
            comment = Comment(
                post_id=post_id,
                nickname=data.nickname,
                content=data.content,
                comment_password=data.comment_password,
            )
            db.add(comment)
            await db.flush()
            await db.execute(
                update(Post)
                .where(Post.id == post_id)
                .values(comment_count=Post.comment_count + 1)
            )
        except SQLAlchemyError as e:
            logger.error("Database error creating comment on post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the comment. Please try again.",
                context={"post_id": str(post_id)},
            )

        logger.info("Comment %s created on post %s", comment.id, post_id)
        return CommentResponse.model_validate(comment)

    async def list_comments(
        self,
        db: AsyncSession,
        post_id: int,
        params: PageParams,
    ) -> PageResponse[CommentResponse]:
        """Newest comments first."""
        await post_service.load_post(db, post_id)

        try:
            query = (
                select(Comment)
                .where(Comment.post_id == post_id)
                .order_by(Comment.created_at.desc(), Comment.id.desc())
            )
            comments, total = await paginate(db, query, params)
        except SQLAlchemyError as e:
            logger.error("Database error listing comments of post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve comments. Please try again.",
                context={"post_id": str(post_id)},
            )

        return PageResponse[CommentResponse](
            current_page=params.page,
            total_pages=total_pages(total, params.page_size),
            total_item_count=total,
            data=[CommentResponse.model_validate(c) for c in comments],
        )

    async def update_comment(
        self,
        db: AsyncSession,
        comment_id: int,
        data: CommentUpdate,
    ) -> CommentResponse:
        comment = await self.load_comment(db, comment_id)
        verify_secret("comment", comment_id, data.comment_password, comment.comment_password)

        comment.nickname = data.nickname
        comment.content = data.content
        try:
            await db.flush()
            await db.refresh(comment)
        except SQLAlchemyError as e:
            logger.error("Database error updating comment %s: %s", comment_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the comment. Please try again.",
                context={"comment_id": str(comment_id)},
            )
        return CommentResponse.model_validate(comment)

    async def delete_comment(
        self,
        db: AsyncSession,
        comment_id: int,
        comment_password: str,
    ) -> MessageResponse:
        comment = await self.load_comment(db, comment_id)
        verify_secret("comment", comment_id, comment_password, comment.comment_password)
        post_id = comment.post_id

        try:
            await db.delete(comment)
            await db.flush()
            await db.execute(
                update(Post)
                .where(Post.id == post_id)
                .values(comment_count=Post.comment_count - 1)
            )
        except SQLAlchemyError as e:
            logger.error("Database error deleting comment %s: %s", comment_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the comment. Please try again.",
                context={"comment_id": str(comment_id)},
            )
        logger.info("Comment %s deleted from post %s", comment_id, post_id)
        return MessageResponse(message="Comment deleted successfully")


comment_service = CommentService()
