"""
Common utilities shared across routers.
"""

from .base import get_user_id, get_user_email
from .pagination import Pagination, get_pagination
from .visibility import active_only_param, include_inactive_param

__all__ = [
    "get_user_id",
    "get_user_email",
    "Pagination",
    "get_pagination",
    "active_only_param",
    "include_inactive_param",
]
