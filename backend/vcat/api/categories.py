# backend/vcat/api/categories.py
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from vcat.api.deps import DBSession, AdminUser, OptionalUser, AppSettings, ViewerGuardian
from vcat.models.category import Category
from vcat.schemas.category import CategoryResponse, VirtualCategoryUpdate
from vcat.schemas.topic import TopicListResponse, TopicResponse
from vcat.services.category_metadata import CategoryMetadataService
from vcat.services.category_validation import VirtualCategoryValidator, VirtualCategoryValidationError
from vcat.services.topic_query import TopicQuery

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["Categories"])


def _get_visible_category(category_id: UUID, db: DBSession, guardian: ViewerGuardian) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    # Unreadable categories look missing so their existence does not leak
    if not category or not guardian.can_see_category(category):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found",
        )
    return category


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: UUID, db: DBSession, guardian: ViewerGuardian, settings: AppSettings):
    category = _get_visible_category(category_id, db, guardian)
    return CategoryResponse.from_category(category, settings.virtual_category_enabled)


@router.get("/{category_id}/topics", response_model=TopicListResponse)
def list_category_topics(
    category_id: UUID,
    db: DBSession,
    current_user: OptionalUser,
    guardian: ViewerGuardian,
    settings: AppSettings,
    page: int = Query(0, ge=0),
    per_page: Optional[int] = Query(None, ge=1, le=100),
):
    """
    List topics in a category.

    Virtual categories also list tagged topics from every category the
    viewer can read.
    """
    category = _get_visible_category(category_id, db, guardian)

    topic_query = TopicQuery(db, current_user, settings, page=page, per_page=per_page)
    topics, total = topic_query.list_category(category)

    return TopicListResponse(
        category_id=category.id,
        virtual=topic_query.lister.is_virtual,
        topics=[TopicResponse.model_validate(t) for t in topics],
        total=total,
        page=topic_query.page,
        per_page=topic_query.per_page,
    )


@router.put("/{category_id}/virtual", response_model=CategoryResponse)
def update_virtual_config(
    category_id: UUID,
    config: VirtualCategoryUpdate,
    db: DBSession,
    current_user: AdminUser,
    settings: AppSettings,
):
    """Mark a category virtual and set the tags and tag groups it aggregates. Admin only."""
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found",
        )

    try:
        tag_names, tag_group_names = VirtualCategoryValidator(settings).validate(
            config.virtual_tag_names, config.virtual_tag_group_names
        )
    except VirtualCategoryValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    CategoryMetadataService(db).save_virtual_config(
        category,
        is_virtual=config.is_virtual_category,
        tag_names=tag_names,
        tag_group_names=tag_group_names,
    )
    logger.info("User %s updated virtual config of category %s", current_user.username, category.id)
    return CategoryResponse.from_category(category, settings.virtual_category_enabled)
