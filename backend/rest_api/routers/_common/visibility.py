"""
Visibility switches for public read endpoints.

Hidden and soft-deleted rows are only listed for admins. Other callers can
pass the switches but always get visible rows only.
"""

from fastapi import Depends, Query

from shared.security.auth import is_admin_request


def include_inactive_param(
    include_inactive: bool = Query(default=False, description="Include hidden rows (admins only)"),
    is_admin: bool = Depends(is_admin_request),
) -> bool:
    return include_inactive and is_admin


def active_only_param(
    active_only: bool = Query(default=False, description="Only active rows (always on for non-admins)"),
    is_admin: bool = Depends(is_admin_request),
) -> bool:
    return active_only or not is_admin
