"""
Zogakzip Backend — Comment Route Handlers
===========================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from zogakzip.database import get_db_session
from zogakzip.routes.params import CommentId, Page, PageSize, PostId
from zogakzip.schemas.comment import CommentCreate, CommentPasswordBody, CommentResponse, CommentUpdate
from zogakzip.schemas.common import ErrorResponse, MessageResponse, PageResponse
from zogakzip.services.comment_service import comment_service
from zogakzip.services.pagination import PageParams

router = APIRouter(prefix="/api", tags=["Comments"])

_NOT_FOUND = {404: {"description": "Post or comment not found", "model": ErrorResponse}}
_UNAUTHORIZED = {401: {"description": "Incorrect password", "model": ErrorResponse}}


@router.post(
    "/posts/{post_id}/comments",
    status_code=201,
    response_model=CommentResponse,
    responses=_NOT_FOUND,
    summary="Comment on a post",
)
async def create_comment(
    post_id: PostId,
    body: CommentCreate,
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    return await comment_service.create_comment(db, post_id, body)


@router.get(
    "/posts/{post_id}/comments",
    response_model=PageResponse[CommentResponse],
    responses=_NOT_FOUND,
    summary="List the comments of a post, newest first",
)
async def list_comments(
    post_id: PostId,
    page: Page = 1,
    page_size: PageSize = 10,
    db: AsyncSession = Depends(get_db_session),
) -> PageResponse[CommentResponse]:
    return await comment_service.list_comments(
        db, post_id, PageParams(page=page, page_size=page_size)
    )


@router.put(
    "/comments/{comment_id}",
    response_model=CommentResponse,
    responses={**_UNAUTHORIZED, **_NOT_FOUND},
    summary="Edit a comment",
)
async def update_comment(
    comment_id: CommentId,
    body: CommentUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    return await comment_service.update_comment(db, comment_id, body)


@router.delete(
    "/comments/{comment_id}",
    response_model=MessageResponse,
    responses={**_UNAUTHORIZED, **_NOT_FOUND},
    summary="Delete a comment",
)
async def delete_comment(
    comment_id: CommentId,
    body: CommentPasswordBody,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await comment_service.delete_comment(db, comment_id, body.comment_password)
