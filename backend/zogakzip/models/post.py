"""
Zogakzip Backend — Post SQLAlchemy Model
==========================================

What:  ORM model representing the `posts` table (a "memory" inside a group).

Table Design Rationale:
    - group_id: owning group; the group's post_count mirrors live posts
    - post_password: independent of the group password, gates edit/delete
      and the private read endpoint
    - moment: when the memory happened (nullable, supplied by the client)
    - comment_count: denormalized, maintained by CommentService
    - tags are linked through `post_tags` (see models/tag.py)
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from zogakzip.database import Base
from zogakzip.models.base import BigIntId, TimestampMixin


class Post(TimestampMixin, Base):
    """A memory posted into a group."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    group_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("groups.id"),
        nullable=False,
    )

    nickname: Mapped[str] = mapped_column(String(100), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    post_password: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    moment: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    is_public: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )

    like_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    comment_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    __table_args__ = (
        Index("idx_posts_group_id", "group_id"),
        Index("idx_posts_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, group_id={self.group_id}, title='{self.title}')>"
