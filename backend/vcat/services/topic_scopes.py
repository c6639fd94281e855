# backend/vcat/services/topic_scopes.py
"""Query scopes shared by every topic lister."""
from sqlalchemy.orm import Query
from sqlalchemy.sql import operators
from sqlalchemy.sql.elements import BinaryExpression, BooleanClauseList

from vcat.models.category import Category
from vcat.models.topic import Topic, DEFAULT_ARCHETYPE
from vcat.services.guardian import Guardian


def scope_category(topics: Query, category: Category) -> Query:
    return topics.filter(Topic.category_id == category.id)


def unscope_category(topics: Query) -> Query:
    """Drop any restriction on the topic's category, keeping other criteria.

    Only top-level ``AND``-ed comparisons against ``Topic.category_id`` are
    removed. The query is rebuilt from its remaining ``WHERE`` criteria, so
    joins and ordering on the incoming query are not carried over.
    """
    whereclause = topics.whereclause
    if whereclause is None:
        return topics

    if isinstance(whereclause, BooleanClauseList) and whereclause.operator is operators.and_:
        criteria = list(whereclause.clauses)
    else:
        criteria = [whereclause]

    kept = [criterion for criterion in criteria if not _restricts_category(criterion)]
    if len(kept) == len(criteria):
        return topics
    return topics.session.query(Topic).filter(*kept)


def _restricts_category(criterion) -> bool:
    if not isinstance(criterion, BinaryExpression):
        return False
    return any(
        getattr(side, "key", None) == "category_id"
        and getattr(getattr(side, "table", None), "name", None) == Topic.__tablename__
        for side in (criterion.left, criterion.right)
    )


def scope_visibility(topics: Query, guardian: Guardian, category: Category) -> Query:
    """Hide what the viewer may not list, whatever category the topics came from.

    Only regular topics are ever listed, for admins too. Unlisted topics are
    staff-only, and trashed topics need the deleted-topics permission on
    ``category``.
    """
    topics = topics.filter(Topic.archetype == DEFAULT_ARCHETYPE)
    if not guardian.is_staff:
        topics = topics.filter(Topic.visible.is_(True))
    if not guardian.can_see_deleted_topics(category):
        topics = topics.filter(Topic.deleted_at.is_(None))
    return topics
