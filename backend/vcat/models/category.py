# backend/vcat/models/category.py
from enum import IntEnum
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import String, Text, Boolean, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vcat.models.base import Base, TimestampMixin, UUIDMixin


class CategoryPermission(IntEnum):
    FULL = 1
    CREATE_POST = 2
    READONLY = 3


class Category(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), index=True)
    slug: Mapped[str] = mapped_column(String(100), unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    # Only groups listed in category_groups may read a restricted category
    read_restricted: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    # Members of this group moderate the category (see deleted topics etc.)
    reviewable_by_group_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("groups.id", ondelete="SET NULL")
    )

    custom_field_rows: Mapped[List["CategoryCustomField"]] = relationship(
        "CategoryCustomField", back_populates="category", cascade="all, delete-orphan"
    )
    group_permissions: Mapped[List["CategoryGroup"]] = relationship(
        "CategoryGroup", back_populates="category", cascade="all, delete-orphan"
    )
    topics = relationship("Topic", back_populates="category")

    @property
    def custom_fields(self) -> Dict[str, Optional[str]]:
        return {row.name: row.value for row in self.custom_field_rows}


class CategoryGroup(Base, UUIDMixin, TimestampMixin):
    """Grants a group access to a read-restricted category."""
    __tablename__ = "category_groups"

    category_id: Mapped[UUID] = mapped_column(ForeignKey("categories.id", ondelete="CASCADE"))
    group_id: Mapped[UUID] = mapped_column(ForeignKey("groups.id", ondelete="CASCADE"))
    permission_type: Mapped[int] = mapped_column(default=CategoryPermission.FULL)

    category = relationship("Category", back_populates="group_permissions")
    group = relationship("Group")

    __table_args__ = (
        UniqueConstraint('category_id', 'group_id', name='uq_category_group'),
        Index('ix_category_groups_group', 'group_id'),
    )


class CategoryCustomField(Base, UUIDMixin, TimestampMixin):
    """Free-form per-category metadata, stored as text."""
    __tablename__ = "category_custom_fields"

    category_id: Mapped[UUID] = mapped_column(ForeignKey("categories.id", ondelete="CASCADE"))
    name: Mapped[str] = mapped_column(String(100))
    value: Mapped[Optional[str]] = mapped_column(Text)

    category = relationship("Category", back_populates="custom_field_rows")

    __table_args__ = (
        UniqueConstraint('category_id', 'name', name='uq_category_custom_field'),
    )
