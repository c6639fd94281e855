# backend/vcat/models/user.py
from enum import Enum
from typing import List
from uuid import UUID

from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vcat.models.base import Base, TimestampMixin, UUIDMixin


class UserRole(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"
    USER = "user"


# Available roles as constants (for validation)
AVAILABLE_ROLES = [role.value for role in UserRole]


class User(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    role: Mapped[UserRole] = mapped_column(default=UserRole.USER)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    group_memberships = relationship(
        "GroupUser", back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_staff(self) -> bool:
        """Admins count as staff, as do moderators with the staff role."""
        return self.role in (UserRole.ADMIN, UserRole.STAFF)

    @property
    def group_ids(self) -> List[UUID]:
        return [m.group_id for m in self.group_memberships]
