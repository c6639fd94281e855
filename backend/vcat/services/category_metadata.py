# backend/vcat/services/category_metadata.py
"""Virtual category configuration stored in category custom fields.

The flag and the two name lists may arrive as native Python values (from an
API payload) or as the text stored in ``category_custom_fields``. Everything
that reads them, the topic filter and the display projection alike, goes
through :func:`parse_name_list` and :func:`parse_flag` so the two can never
disagree about what is configured.
"""
import logging
from typing import Any, Iterable, List, Optional

from sqlalchemy.orm import Session

from vcat.models.category import Category, CategoryCustomField

logger = logging.getLogger(__name__)

VIRTUAL_FLAG_FIELD = "is_virtual_category"
TAG_NAMES_FIELD = "virtual_tag_names"
TAG_GROUP_NAMES_FIELD = "virtual_tag_group_names"

LIST_DELIMITER = "|"


def parse_name_list(raw: Any) -> List[str]:
    """Normalize a "|"-joined string or a list into an ordered, duplicate-free list.

    Segments are stripped and empty ones dropped. Values of any other type
    normalize to an empty list.
    """
    if not raw:
        return []
    if isinstance(raw, str):
        items: Iterable[Any] = raw.split(LIST_DELIMITER)
    elif isinstance(raw, (list, tuple)):
        items = raw
    else:
        return []

    names: List[str] = []
    for item in items:
        if not isinstance(item, str):
            continue
        name = item.strip()
        if name and name not in names:
            names.append(name)
    return names


def join_name_list(names: Any) -> str:
    return LIST_DELIMITER.join(parse_name_list(names))


def parse_flag(raw: Any) -> bool:
    if raw is True:
        return True
    if isinstance(raw, str):
        return raw.strip().lower() == "true"
    return False


class CategoryMetadata:
    """Read-only view of one category's virtual configuration."""

    def __init__(self, category: Optional[Category]):
        self.category = category
        self._fields = category.custom_fields if category is not None else {}

    def is_virtual(self) -> bool:
        return parse_flag(self._fields.get(VIRTUAL_FLAG_FIELD))

    def tag_names(self) -> List[str]:
        return parse_name_list(self._fields.get(TAG_NAMES_FIELD))

    def tag_group_names(self) -> List[str]:
        return parse_name_list(self._fields.get(TAG_GROUP_NAMES_FIELD))


class CategoryMetadataService:
    def __init__(self, db: Session):
        self.db = db

    def save_virtual_config(
        self,
        category: Category,
        is_virtual: bool,
        tag_names: Any,
        tag_group_names: Any,
    ) -> CategoryMetadata:
        """Persist the flag and name lists. Callers validate limits beforehand."""
        values = {
            VIRTUAL_FLAG_FIELD: "true" if is_virtual else "false",
            TAG_NAMES_FIELD: join_name_list(tag_names),
            TAG_GROUP_NAMES_FIELD: join_name_list(tag_group_names),
        }

        existing = {row.name: row for row in category.custom_field_rows}
        for name, value in values.items():
            row = existing.get(name)
            if row is None:
                category.custom_field_rows.append(CategoryCustomField(name=name, value=value))
            else:
                row.value = value

        self.db.commit()
        self.db.refresh(category)

        logger.info(
            "Saved virtual config for category %s: virtual=%s tags=%r tag_groups=%r",
            category.id, is_virtual, values[TAG_NAMES_FIELD], values[TAG_GROUP_NAMES_FIELD],
        )
        return CategoryMetadata(category)
