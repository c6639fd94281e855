# backend/vcat/models/__init__.py
from vcat.models.base import Base
from vcat.models.user import User, UserRole, AVAILABLE_ROLES
from vcat.models.group import Group, GroupUser
from vcat.models.category import Category, CategoryGroup, CategoryCustomField, CategoryPermission
from vcat.models.tag import Tag, TagGroup, TagGroupMembership, TopicTag
from vcat.models.topic import Topic, TopicArchetype, DEFAULT_ARCHETYPE

__all__ = [
    "Base",
    "User", "UserRole", "AVAILABLE_ROLES",
    "Group", "GroupUser",
    "Category", "CategoryGroup", "CategoryCustomField", "CategoryPermission",
    "Tag", "TagGroup", "TagGroupMembership", "TopicTag",
    "Topic", "TopicArchetype", "DEFAULT_ARCHETYPE",
]
