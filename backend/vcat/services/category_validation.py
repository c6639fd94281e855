# backend/vcat/services/category_validation.py
from typing import Any, List, Tuple

from vcat.config import Settings
from vcat.services.category_metadata import parse_name_list


class VirtualCategoryValidationError(ValueError):
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class VirtualCategoryValidator:
    """Enforces the per-category tag and tag-group limits when a category is saved."""

    def __init__(self, settings: Settings):
        self.max_tags = settings.max_virtual_tags
        self.max_tag_groups = settings.max_virtual_tag_groups

    def validate(self, tag_names: Any, tag_group_names: Any) -> Tuple[List[str], List[str]]:
        tags = parse_name_list(tag_names)
        tag_groups = parse_name_list(tag_group_names)

        errors = []
        if len(tags) > self.max_tags:
            errors.append(
                f"You specified {len(tags)} tags but a virtual category "
                f"may have at most {self.max_tags}"
            )
        if len(tag_groups) > self.max_tag_groups:
            errors.append(
                f"You specified {len(tag_groups)} tag groups but a virtual category "
                f"may have at most {self.max_tag_groups}"
            )
        if errors:
            raise VirtualCategoryValidationError(errors)

        return tags, tag_groups
