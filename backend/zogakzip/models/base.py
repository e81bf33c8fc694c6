"""Column types and mixins shared by every table."""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

# 64-bit identifiers on PostgreSQL. SQLite only autoincrements INTEGER
# PRIMARY KEY columns, so the test database gets a plain Integer.
BigIntId = BigInteger().with_variant(Integer, "sqlite")

# Largest value a BIGINT column (or a LIMIT/OFFSET) can hold
MAX_BIGINT = 2**63 - 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """created_at / updated_at columns, both stored in UTC."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
