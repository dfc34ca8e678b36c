from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from memos_web.models.base import Base, TimestampMixin


class Shortcut(Base, TimestampMixin):
    """Named, persisted filter clause sequence."""

    __tablename__ = "shortcuts"

    id: Mapped[int] = mapped_column(primary_key=True)
    creator_id: Mapped[int] = mapped_column(Integer, index=True)
    title: Mapped[str] = mapped_column(String(255))
    payload: Mapped[str] = mapped_column(Text, default="[]")  # JSON clause list
    pinned: Mapped[bool] = mapped_column(Boolean, default=False)
