from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from memos_web.models.base import Base, TimestampMixin


class Tag(Base, TimestampMixin):
    """Tag name registered by a user; the TAG filter's value domain."""

    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("creator_id", "name", name="uq_tags_creator_name"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    creator_id: Mapped[int] = mapped_column(Integer, index=True)
    name: Mapped[str] = mapped_column(String(100), index=True)
