from memos_web.models.base import Base
from memos_web.models.memo import Memo, RowStatus, Visibility
from memos_web.models.shortcut import Shortcut
from memos_web.models.tag import Tag

__all__ = [
    "Base",
    "Memo",
    "RowStatus",
    "Shortcut",
    "Tag",
    "Visibility",
]
