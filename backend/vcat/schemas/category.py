# backend/vcat/schemas/category.py
from typing import List, Optional, Union
from uuid import UUID
from pydantic import BaseModel, Field

from vcat.models.category import Category
from vcat.services.category_metadata import CategoryMetadata


class CategoryResponse(BaseModel):
    """Category as shown to clients, including the virtual badge fields.

    The virtual fields report what is stored; clients show the badge only
    when ``virtual_category_enabled`` is set.
    """
    id: UUID
    name: str
    slug: str
    description: Optional[str] = None
    read_restricted: bool
    is_virtual_category: bool = False
    virtual_tag_names: List[str] = Field(default_factory=list)
    virtual_tag_group_names: List[str] = Field(default_factory=list)
    virtual_category_enabled: bool = False

    @classmethod
    def from_category(cls, category: Category, virtual_category_enabled: bool) -> "CategoryResponse":
        metadata = CategoryMetadata(category)
        return cls(
            id=category.id,
            name=category.name,
            slug=category.slug,
            description=category.description,
            read_restricted=category.read_restricted,
            is_virtual_category=metadata.is_virtual(),
            virtual_tag_names=metadata.tag_names(),
            virtual_tag_group_names=metadata.tag_group_names(),
            virtual_category_enabled=virtual_category_enabled,
        )


class VirtualCategoryUpdate(BaseModel):
    is_virtual_category: bool
    # Either a "|"-joined string or a list of names
    virtual_tag_names: Union[str, List[str], None] = None
    virtual_tag_group_names: Union[str, List[str], None] = None
