# backend/vcat/services/topic_query.py
"""Category topic listings.

:class:`TopicQuery` decides per call whether a category is listed plainly
or as a virtual category, picks the matching lister and paginates whatever
query the lister builds.
"""
import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import desc
from sqlalchemy.orm import Query, Session

from vcat.config import Settings
from vcat.models.category import Category
from vcat.models.topic import Topic
from vcat.models.user import User
from vcat.services.access_policy import AccessPolicy
from vcat.services.category_metadata import CategoryMetadata
from vcat.services.guardian import Guardian
from vcat.services.tag_resolver import TagResolver
from vcat.services.topic_scopes import scope_category, scope_visibility
from vcat.services.virtual_filter import VirtualCategoryFilter

logger = logging.getLogger(__name__)


class DefaultTopicLister:
    is_virtual = False

    def __init__(self, db: Session, guardian: Guardian):
        self.db = db
        self.guardian = guardian

    def base_query(self) -> Query:
        """All topics, not yet restricted to any category."""
        return self.db.query(Topic)

    def category_query(self, category: Category) -> Query:
        topics = scope_category(self.base_query(), category)
        return scope_visibility(topics, self.guardian, category)


class VirtualAwareTopicLister(DefaultTopicLister):
    is_virtual = True

    def __init__(self, db: Session, guardian: Guardian, tag_ids: Iterable):
        super().__init__(db, guardian)
        self.tag_ids = set(tag_ids)

    def category_query(self, category: Category) -> Query:
        return VirtualCategoryFilter(
            topics=self.base_query(),
            category=category,
            tag_ids=self.tag_ids,
            guardian=self.guardian,
            access_policy=AccessPolicy(self.guardian),
        ).filter()


class TopicQuery:
    def __init__(
        self,
        db: Session,
        user: Optional[User],
        settings: Settings,
        page: int = 0,
        per_page: Optional[int] = None,
    ):
        self.db = db
        self.guardian = Guardian(db, user)
        self.settings = settings
        self.page = max(page, 0)
        self.per_page = per_page or settings.topics_per_page
        # Set by list_category to the lister that produced the last listing
        self.lister: Optional[DefaultTopicLister] = None

    @property
    def virtual_categories_enabled(self) -> bool:
        return self.settings.virtual_category_enabled and self.settings.tagging_enabled

    def lister_for(self, category: Optional[Category]) -> DefaultTopicLister:
        if not self.virtual_categories_enabled:
            return DefaultTopicLister(self.db, self.guardian)

        metadata = CategoryMetadata(category)
        if not metadata.is_virtual():
            return DefaultTopicLister(self.db, self.guardian)

        tag_ids = TagResolver(self.db).resolve(metadata.tag_names(), metadata.tag_group_names())
        if not tag_ids:
            logger.debug("Virtual category %s resolved no tags, listing it plainly", category.id)
            return DefaultTopicLister(self.db, self.guardian)

        return VirtualAwareTopicLister(self.db, self.guardian, tag_ids)

    def list_category(self, category: Category) -> Tuple[List[Topic], int]:
        self.lister = self.lister_for(category)
        logger.debug("Listing category %s with %s", category.id, type(self.lister).__name__)
        return self.paginate(self.lister.category_query(category))

    def paginate(self, topics: Query) -> Tuple[List[Topic], int]:
        total = topics.count()
        page = (
            topics.order_by(desc(Topic.bumped_at), desc(Topic.id))
            .offset(self.page * self.per_page)
            .limit(self.per_page)
            .all()
        )
        return page, total
