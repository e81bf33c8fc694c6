"""
Zogakzip Backend — Group Request/Response Schemas
===================================================

What:  API contract for /api/groups.
Why separate from the ORM model: the stored password must never leave the
server, and request bodies differ per operation.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from zogakzip.schemas.common import CamelModel, IdStr


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class GroupCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    group_password: str = Field(min_length=1, max_length=255)
    image_url: Optional[str] = Field(default=None, max_length=500)
    is_public: bool = Field(default=True)
    introduction: Optional[str] = None


class GroupUpdate(CamelModel):
    """
    What:  Body of PUT /api/groups/{groupId}.

    group_password authorizes the change and is not itself changed.
    Only the fields present in the body are updated.
    """
    group_password: str = Field(min_length=1)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    image_url: Optional[str] = Field(default=None, max_length=500)
    is_public: Optional[bool] = None
    introduction: Optional[str] = None


class GroupPasswordBody(CamelModel):
    """Body of DELETE /api/groups/{groupId} and POST /api/groups/{groupId}/private."""
    group_password: str = Field(min_length=1)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class GroupResponse(CamelModel):
    id: IdStr
    name: str
    image_url: Optional[str] = None
    introduction: Optional[str] = None
    is_public: bool
    group_like_count: int
    post_count: int
    created_at: datetime
    updated_at: datetime
