"""
Zogakzip Backend — Group Route Handlers
=========================================

What:  /api/groups endpoints.
How:   Extracts path/query/body, delegates to GroupService, returns JSON.

Private groups:
    GET /api/groups/{groupId} answers 403 for a private group without
    exposing any field. Clients then POST the password to
    /api/groups/{groupId}/private to read it.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from zogakzip.database import get_db_session
from zogakzip.routes.params import GroupId, IsPublic, Keyword, Page, PageSize, SortBy
from zogakzip.schemas.common import ErrorResponse, MessageResponse, PageResponse, VisibilityResponse
from zogakzip.schemas.group import GroupCreate, GroupPasswordBody, GroupResponse, GroupUpdate
from zogakzip.services.group_service import group_service
from zogakzip.services.pagination import PageParams

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/groups", tags=["Groups"])

_NOT_FOUND = {404: {"description": "Group not found", "model": ErrorResponse}}
_UNAUTHORIZED = {401: {"description": "Incorrect password", "model": ErrorResponse}}


@router.post(
    "",
    status_code=201,
    response_model=GroupResponse,
    responses={400: {"description": "Invalid request", "model": ErrorResponse}},
    summary="Create a group",
)
async def create_group(
    body: GroupCreate,
    db: AsyncSession = Depends(get_db_session),
) -> GroupResponse:
    return await group_service.create_group(db, body)


@router.get(
    "",
    response_model=PageResponse[GroupResponse],
    summary="List groups with pagination",
    description=(
        "Offset pagination. sortBy is one of latest, mostPosted, mostLiked "
        "(unknown values sort by latest). keyword matches the name or introduction."
    ),
)
async def list_groups(
    page: Page = 1,
    page_size: PageSize = 10,
    sort_by: SortBy = "latest",
    keyword: Keyword = None,
    is_public: IsPublic = None,
    db: AsyncSession = Depends(get_db_session),
) -> PageResponse[GroupResponse]:
    return await group_service.list_groups(
        db,
        PageParams(page=page, page_size=page_size),
        sort_by=sort_by,
        keyword=keyword,
        is_public=is_public,
    )


@router.get(
    "/{group_id}",
    response_model=GroupResponse,
    responses={403: {"description": "Group is private", "model": ErrorResponse}, **_NOT_FOUND},
    summary="Get a public group",
)
async def get_group(
    group_id: GroupId,
    db: AsyncSession = Depends(get_db_session),
) -> GroupResponse:
    return await group_service.get_group(db, group_id)


@router.put(
    "/{group_id}",
    response_model=GroupResponse,
    responses={**_UNAUTHORIZED, **_NOT_FOUND},
    summary="Update a group",
)
async def update_group(
    group_id: GroupId,
    body: GroupUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> GroupResponse:
    return await group_service.update_group(db, group_id, body)


@router.delete(
    "/{group_id}",
    response_model=MessageResponse,
    responses={**_UNAUTHORIZED, **_NOT_FOUND},
    summary="Delete a group with all of its posts and comments",
)
async def delete_group(
    group_id: GroupId,
    body: GroupPasswordBody,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await group_service.delete_group(db, group_id, body.group_password)


@router.post(
    "/{group_id}/private",
    response_model=GroupResponse,
    responses={**_UNAUTHORIZED, **_NOT_FOUND},
    summary="Read a group with its password",
)
async def get_private_group(
    group_id: GroupId,
    body: GroupPasswordBody,
    db: AsyncSession = Depends(get_db_session),
) -> GroupResponse:
    return await group_service.get_private_group(db, group_id, body.group_password)


@router.post(
    "/{group_id}/like",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Like a group",
)
async def like_group(
    group_id: GroupId,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await group_service.like_group(db, group_id)


@router.get(
    "/{group_id}/is-public",
    response_model=VisibilityResponse,
    responses=_NOT_FOUND,
    summary="Check whether a group is public",
)
async def get_group_visibility(
    group_id: GroupId,
    db: AsyncSession = Depends(get_db_session),
) -> VisibilityResponse:
    return await group_service.get_visibility(db, group_id)
