from enum import Enum

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from memos_web.models.base import Base, TimestampMixin


class Visibility(str, Enum):
    PUBLIC = "PUBLIC"
    PROTECTED = "PROTECTED"
    PRIVATE = "PRIVATE"


class RowStatus(str, Enum):
    NORMAL = "NORMAL"
    ARCHIVED = "ARCHIVED"


class Memo(Base, TimestampMixin):
    """A note owned by one user. Tags are #hashtags inside the content."""

    __tablename__ = "memos"

    id: Mapped[int] = mapped_column(primary_key=True)
    creator_id: Mapped[int] = mapped_column(Integer, index=True)
    content: Mapped[str] = mapped_column(Text, default="")
    visibility: Mapped[str] = mapped_column(String(20), default=Visibility.PRIVATE.value)
    row_status: Mapped[str] = mapped_column(
        String(20), default=RowStatus.NORMAL.value, index=True
    )
    pinned: Mapped[bool] = mapped_column(Boolean, default=False)
