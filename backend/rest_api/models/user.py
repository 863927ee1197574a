"""
User and Authentication Models.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.config.constants import Roles
from .base import AuditMixin, Base, IdType


class User(AuditMixin, Base):
    """
    Back-office account. Only users with the admin role may change catalog data.
    Inherits: is_active, audit fields and version from AuditMixin.
    """

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)  # bcrypt hash
    first_name: Mapped[Optional[str]] = mapped_column(String(100))
    last_name: Mapped[Optional[str]] = mapped_column(String(100))
    role: Mapped[str] = mapped_column(String(20), default=Roles.USER, nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == Roles.ADMIN
