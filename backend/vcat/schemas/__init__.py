# backend/vcat/schemas/__init__.py
from vcat.schemas.user import UserBase, UserCreate, UserResponse
from vcat.schemas.auth import LoginRequest, TokenResponse
from vcat.schemas.category import CategoryResponse, VirtualCategoryUpdate
from vcat.schemas.topic import TopicResponse, TopicListResponse

__all__ = [
    "UserBase", "UserCreate", "UserResponse",
    "LoginRequest", "TokenResponse",
    "CategoryResponse", "VirtualCategoryUpdate",
    "TopicResponse", "TopicListResponse",
]
