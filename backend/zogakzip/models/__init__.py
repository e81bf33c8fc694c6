# Models package init
"""
Zogakzip Backend — ORM Models
===============================

Importing this package registers every table with `Base.metadata`
(used by Alembic autogenerate and by the test suite's create_all()).
"""

from zogakzip.models.comment import Comment
from zogakzip.models.group import Group
from zogakzip.models.post import Post
from zogakzip.models.tag import PostTag, Tag

__all__ = ["Comment", "Group", "Post", "PostTag", "Tag"]
