"""
Zogakzip Backend — Post Route Handlers
========================================

What:  Posts are created and listed under their group
       (/api/groups/{groupId}/posts) and addressed directly afterwards
       (/api/posts/{postId}).
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from zogakzip.database import get_db_session
from zogakzip.routes.params import GroupId, IsPublic, Keyword, Page, PageSize, PostId, SortBy
from zogakzip.schemas.common import ErrorResponse, MessageResponse, PageResponse, VisibilityResponse
from zogakzip.schemas.post import PostCreate, PostPasswordBody, PostResponse, PostSummary, PostUpdate
from zogakzip.services.pagination import PageParams
from zogakzip.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Posts"])

_NOT_FOUND = {404: {"description": "Group or post not found", "model": ErrorResponse}}
_UNAUTHORIZED = {401: {"description": "Incorrect password", "model": ErrorResponse}}
_FORBIDDEN = {403: {"description": "Post is private", "model": ErrorResponse}}


@router.post(
    "/groups/{group_id}/posts",
    status_code=201,
    response_model=PostResponse,
    responses={**_UNAUTHORIZED, **_NOT_FOUND},
    summary="Create a post in a group",
    description="Requires the group's password. Tags are created on first use.",
)
async def create_post(
    group_id: GroupId,
    body: PostCreate,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.create_post(db, group_id, body)


@router.get(
    "/groups/{group_id}/posts",
    response_model=PageResponse[PostSummary],
    responses=_NOT_FOUND,
    summary="List the posts of a group",
    description=(
        "Offset pagination. sortBy is one of latest, mostCommented, mostLiked. "
        "keyword matches the title, the content or a tag."
    ),
)
async def list_posts(
    group_id: GroupId,
    page: Page = 1,
    page_size: PageSize = 10,
    sort_by: SortBy = "latest",
    keyword: Keyword = None,
    is_public: IsPublic = None,
    db: AsyncSession = Depends(get_db_session),
) -> PageResponse[PostSummary]:
    return await post_service.list_posts(
        db,
        group_id,
        PageParams(page=page, page_size=page_size),
        sort_by=sort_by,
        keyword=keyword,
        is_public=is_public,
    )


@router.get(
    "/posts/{post_id}",
    response_model=PostResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="Get a public post",
)
async def get_post(
    post_id: PostId,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.get_post(db, post_id)


@router.put(
    "/posts/{post_id}",
    response_model=PostResponse,
    responses={**_UNAUTHORIZED, **_NOT_FOUND},
    summary="Update a post",
)
async def update_post(
    post_id: PostId,
    body: PostUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.update_post(db, post_id, body)


@router.delete(
    "/posts/{post_id}",
    response_model=MessageResponse,
    responses={**_UNAUTHORIZED, **_NOT_FOUND},
    summary="Delete a post with its comments",
)
async def delete_post(
    post_id: PostId,
    body: PostPasswordBody,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await post_service.delete_post(db, post_id, body.post_password)


@router.post(
    "/posts/{post_id}/private",
    response_model=PostResponse,
    responses={**_UNAUTHORIZED, **_NOT_FOUND},
    summary="Read a post with its password",
)
async def get_private_post(
    post_id: PostId,
    body: PostPasswordBody,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.get_private_post(db, post_id, body.post_password)


@router.post(
    "/posts/{post_id}/like",
    response_model=MessageResponse,
    responses={**_FORBIDDEN, **_NOT_FOUND},
    summary="Like a public post",
)
async def like_post(
    post_id: PostId,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await post_service.like_post(db, post_id)


@router.post(
    "/posts/{post_id}/like/private",
    response_model=MessageResponse,
    responses={**_UNAUTHORIZED, **_NOT_FOUND},
    summary="Like a private post with its password",
)
async def like_private_post(
    post_id: PostId,
    body: PostPasswordBody,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await post_service.like_private_post(db, post_id, body.post_password)


@router.get(
    "/posts/{post_id}/is-public",
    response_model=VisibilityResponse,
    responses=_NOT_FOUND,
    summary="Check whether a post is public",
)
async def get_post_visibility(
    post_id: PostId,
    db: AsyncSession = Depends(get_db_session),
) -> VisibilityResponse:
    return await post_service.get_visibility(db, post_id)
