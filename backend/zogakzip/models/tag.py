"""
Zogakzip Backend — Tag and PostTag Models
===========================================

What:  `tags` holds each distinct tag string once; `post_tags` links posts
       to tags (many-to-many).

Lifecycle:
    Tags are created lazily by the tag resolver (find-or-create) and are
    never deleted, even when the last post referencing them goes away.
    PostTag rows have no life of their own: they are replaced wholesale on
    post update and deleted before their post.
"""

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from zogakzip.database import Base
from zogakzip.models.base import BigIntId


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    # Exact-match unique: "Travel" and "travel " are different tags
    content: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, content='{self.content}')>"


class PostTag(Base):
    __tablename__ = "post_tags"

    post_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("posts.id"),
        primary_key=True,
    )
    tag_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("tags.id"),
        primary_key=True,
    )

    __table_args__ = (
        Index("idx_post_tags_tag_id", "tag_id"),
    )

    def __repr__(self) -> str:
        return f"<PostTag(post_id={self.post_id}, tag_id={self.tag_id})>"
