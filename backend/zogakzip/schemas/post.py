"""
Zogakzip Backend — Post Request/Response Schemas
==================================================

What:  API contract for posts (memories).

Tags travel as a plain list of strings. The stored post password and the
group password used at creation time never appear in responses.
"""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import Field

from zogakzip.schemas.common import CamelModel, IdStr

# One tag string; matches the width of tags.content
TagText = Annotated[str, Field(min_length=1, max_length=100)]


class PostCreate(CamelModel):
    """
    What:  Body of POST /api/groups/{groupId}/posts.

    group_password must match the owning group's password;
    post_password becomes the secret for later edits of this post.
    """
    nickname: str = Field(min_length=1, max_length=100)
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    post_password: str = Field(min_length=1, max_length=255)
    group_password: str = Field(min_length=1)
    image_url: Optional[str] = Field(default=None, max_length=500)
    tags: List[TagText] = Field(default_factory=list)
    location: Optional[str] = Field(default=None, max_length=255)
    moment: Optional[datetime] = None
    is_public: bool = Field(default=True)


class PostUpdate(CamelModel):
    """
    What:  Body of PUT /api/posts/{postId}.

    Only fields present in the body are changed. When `tags` is present the
    post's tag links are replaced wholesale.
    """
    post_password: str = Field(min_length=1)
    nickname: Optional[str] = Field(default=None, min_length=1, max_length=100)
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = Field(default=None, max_length=500)
    tags: Optional[List[TagText]] = None
    location: Optional[str] = Field(default=None, max_length=255)
    moment: Optional[datetime] = None
    is_public: Optional[bool] = None


class PostPasswordBody(CamelModel):
    """Body of DELETE, /private and /like/private on a post."""
    post_password: str = Field(min_length=1)


class PostSummary(CamelModel):
    """List item for GET /api/groups/{groupId}/posts; omits the content body."""
    id: IdStr
    group_id: IdStr
    nickname: str
    title: str
    image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    location: Optional[str] = None
    moment: Optional[datetime] = None
    is_public: bool
    like_count: int
    comment_count: int
    created_at: datetime


class PostResponse(PostSummary):
    content: str
    updated_at: datetime
