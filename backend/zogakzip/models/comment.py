"""
Zogakzip Backend — Comment SQLAlchemy Model
=============================================

What:  ORM model representing the `comments` table.
Each comment carries its own password, required for edit and delete.
Creating or deleting a comment moves the parent post's comment_count.
"""

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from zogakzip.database import Base
from zogakzip.models.base import BigIntId, TimestampMixin


class Comment(TimestampMixin, Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    post_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("posts.id"),
        nullable=False,
    )

    nickname: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    comment_password: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        Index("idx_comments_post_id", "post_id"),
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, post_id={self.post_id})>"
