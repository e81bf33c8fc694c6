"""
Zogakzip Backend — Group SQLAlchemy Model
===========================================

What:  ORM model representing the `groups` table.
Who:   Used by GroupService and PostService; read by Alembic for migrations.

Table Design Rationale:
    - BIGINT primary key: serialized as a string in JSON responses
    - group_password: stored as plaintext and compared with exact equality
    - group_like_count / post_count: denormalized counters. post_count is
      kept equal to the number of live posts by PostService on create/delete.
"""

from typing import Optional

from sqlalchemy import Boolean, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from zogakzip.database import Base
from zogakzip.models.base import BigIntId, TimestampMixin


class Group(TimestampMixin, Base):
    """
    Top-level container of posts, gated by a shared password.

    Lifecycle:
        1. Created by POST /api/groups with both counters at zero
        2. Counters mutated by likes and post create/delete
        3. Deleted together with its posts, their comments and tag links
    """

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    group_password: Mapped[str] = mapped_column(String(255), nullable=False)

    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    introduction: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_public: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )

    group_like_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    post_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    # Listing sorts by these three columns
    __table_args__ = (
        Index("idx_groups_created_at", "created_at"),
        Index("idx_groups_post_count", "post_count"),
        Index("idx_groups_like_count", "group_like_count"),
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name='{self.name}', is_public={self.is_public})>"
