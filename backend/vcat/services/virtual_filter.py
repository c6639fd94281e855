# backend/vcat/services/virtual_filter.py
import logging
from typing import Iterable, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Query

from vcat.models.category import Category
from vcat.models.tag import TopicTag
from vcat.models.topic import Topic
from vcat.services.access_policy import AccessPolicy, UNRESTRICTED
from vcat.services.guardian import Guardian
from vcat.services.topic_scopes import scope_category, scope_visibility, unscope_category

logger = logging.getLogger(__name__)


class VirtualCategoryFilter:
    """Scopes a topic query to what a virtual category shows a viewer.

    Any category restriction already on ``topics`` is dropped first: the
    filter works over every topic and picks the category's own topics plus
    the tagged topics the viewer may read. The result is still a lazy
    query; ordering and pagination stay with the caller.
    """

    def __init__(
        self,
        topics: Query,
        category: Category,
        tag_ids: Iterable,
        guardian: Guardian,
        access_policy: Optional[AccessPolicy] = None,
    ):
        self.topics = topics
        self.category = category
        self.tag_ids = set(tag_ids or [])
        self.guardian = guardian
        self.access_policy = access_policy or AccessPolicy(guardian)

    def filter(self) -> Query:
        topics = unscope_category(self.topics)
        if not self.tag_ids:
            # Nothing to aggregate: plain single-category listing
            topics = scope_category(topics, self.category)
            return scope_visibility(topics, self.guardian, self.category)

        topics = self._apply_union_filter(topics)
        topics = scope_visibility(topics, self.guardian, self.category)
        return topics.distinct()

    def _tagged_topic_ids(self):
        return select(TopicTag.topic_id).where(TopicTag.tag_id.in_(list(self.tag_ids)))

    def _apply_union_filter(self, topics: Query) -> Query:
        native = Topic.category_id == self.category.id
        tagged = Topic.id.in_(self._tagged_topic_ids())

        allowed = self.access_policy.accessible_category_ids()
        if allowed is UNRESTRICTED:
            return topics.filter(or_(native, tagged))

        if not allowed:
            logger.debug(
                "Viewer can read no categories; virtual category %s shows native topics only",
                self.category.id,
            )
            return topics.filter(native)

        return topics.filter(
            or_(native, and_(tagged, Topic.category_id.in_(list(allowed))))
        )
