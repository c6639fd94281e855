# backend/vcat/services/tag_resolver.py
import logging
from typing import Iterable, Set
from uuid import UUID

from sqlalchemy.orm import Session

from vcat.models.tag import Tag, TagGroup, TagGroupMembership

logger = logging.getLogger(__name__)


class TagResolver:
    """Turns configured tag names and tag-group names into tag ids."""

    def __init__(self, db: Session):
        self.db = db

    def resolve(self, tag_names: Iterable[str], tag_group_names: Iterable[str]) -> Set[UUID]:
        tag_names = list(tag_names or [])
        tag_group_names = list(tag_group_names or [])
        tag_ids: Set[UUID] = set()

        if tag_names:
            rows = self.db.query(Tag.id).filter(Tag.name.in_(tag_names)).all()
            tag_ids.update(row[0] for row in rows)

        if tag_group_names:
            rows = (
                self.db.query(TagGroupMembership.tag_id)
                .join(TagGroup, TagGroup.id == TagGroupMembership.tag_group_id)
                .filter(TagGroup.name.in_(tag_group_names))
                .all()
            )
            tag_ids.update(row[0] for row in rows)

        logger.debug(
            "Resolved tags=%r tag_groups=%r to %d tag ids",
            tag_names, tag_group_names, len(tag_ids),
        )
        return tag_ids
