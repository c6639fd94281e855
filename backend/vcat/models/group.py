# backend/vcat/models/group.py
from uuid import UUID

from sqlalchemy import String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vcat.models.base import Base, TimestampMixin, UUIDMixin


class Group(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "groups"

    name: Mapped[str] = mapped_column(String(100), unique=True, index=True)

    members = relationship("GroupUser", back_populates="group", cascade="all, delete-orphan")


class GroupUser(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "group_users"

    group_id: Mapped[UUID] = mapped_column(ForeignKey("groups.id", ondelete="CASCADE"))
    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))

    group = relationship("Group", back_populates="members")
    user = relationship("User", back_populates="group_memberships")

    __table_args__ = (
        UniqueConstraint('group_id', 'user_id', name='uq_group_user'),
    )
