"""
Zogakzip Backend — Shared Path & Query Parameters
===================================================

Identifiers are positive BIGINTs; anything outside that range fails request
validation (400) instead of reaching the database driver.
"""

from typing import Annotated, Optional

from fastapi import Path, Query

from zogakzip.models.base import MAX_BIGINT

GroupId = Annotated[int, Path(ge=1, le=MAX_BIGINT, description="Group id")]
PostId = Annotated[int, Path(ge=1, le=MAX_BIGINT, description="Post id")]
CommentId = Annotated[int, Path(ge=1, le=MAX_BIGINT, description="Comment id")]

Page = Annotated[int, Query(ge=1, le=MAX_BIGINT, description="1-based page number")]
PageSize = Annotated[int, Query(ge=1, le=MAX_BIGINT, alias="pageSize")]
SortBy = Annotated[str, Query(alias="sortBy")]
Keyword = Annotated[Optional[str], Query(description="Substring to search for")]
IsPublic = Annotated[Optional[bool], Query(alias="isPublic")]
