"""Utility modules for common operations."""

from memos_web.utils.htmx import is_htmx_request

__all__ = [
    "is_htmx_request",
]
