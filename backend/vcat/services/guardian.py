# backend/vcat/services/guardian.py
"""Per-request permission checks for a viewer.

The viewer is a :class:`~vcat.models.user.User`, or ``None`` for anonymous
visitors.
"""
from typing import Optional, Set
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from vcat.models.category import Category, CategoryGroup
from vcat.models.user import User


class Guardian:
    def __init__(self, db: Session, user: Optional[User] = None):
        self.db = db
        self.user = user

    @property
    def is_anonymous(self) -> bool:
        return self.user is None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.is_admin

    @property
    def is_staff(self) -> bool:
        return self.user is not None and self.user.is_staff

    @property
    def group_ids(self) -> Set[UUID]:
        if self.user is None:
            return set()
        return set(self.user.group_ids)

    def public_category_ids(self) -> Set[UUID]:
        rows = self.db.query(Category.id).filter(Category.read_restricted.is_(False)).all()
        return {row[0] for row in rows}

    def secured_category_ids(self) -> Set[UUID]:
        """Categories this viewer may read.

        Admins read everything. Everyone else reads the public categories
        plus any restricted category granted to one of their groups.
        """
        query = self.db.query(Category.id)
        if self.is_admin:
            return {row[0] for row in query.all()}

        group_ids = self.group_ids
        if not group_ids:
            return self.public_category_ids()

        granted = select(CategoryGroup.category_id).where(
            CategoryGroup.group_id.in_(list(group_ids))
        )
        rows = query.filter(
            or_(
                Category.read_restricted.is_(False),
                Category.id.in_(granted),
            )
        ).all()
        return {row[0] for row in rows}

    def can_see_category(self, category: Optional[Category]) -> bool:
        if category is None:
            return False
        if self.is_admin or not category.read_restricted:
            return True
        group_ids = self.group_ids
        return any(p.group_id in group_ids for p in category.group_permissions)

    def is_category_moderator(self, category: Optional[Category]) -> bool:
        if category is None or category.reviewable_by_group_id is None:
            return False
        return category.reviewable_by_group_id in self.group_ids

    def can_see_deleted_topics(self, category: Optional[Category]) -> bool:
        return self.is_staff or self.is_category_moderator(category)
