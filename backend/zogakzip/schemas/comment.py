"""
Zogakzip Backend — Comment Request/Response Schemas
=====================================================
"""

from datetime import datetime

from pydantic import Field

from zogakzip.schemas.common import CamelModel, IdStr


class CommentCreate(CamelModel):
    nickname: str = Field(min_length=1, max_length=100)
    content: str = Field(min_length=1)
    comment_password: str = Field(min_length=1, max_length=255)


class CommentUpdate(CommentCreate):
    """All three fields are required; comment_password authorizes the edit."""


class CommentPasswordBody(CamelModel):
    comment_password: str = Field(min_length=1)


class CommentResponse(CamelModel):
    id: IdStr
    post_id: IdStr
    nickname: str
    content: str
    created_at: datetime
    updated_at: datetime
