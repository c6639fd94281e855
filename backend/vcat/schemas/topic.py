# backend/vcat/schemas/topic.py
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel

from vcat.models.topic import TopicArchetype


class TopicResponse(BaseModel):
    id: UUID
    title: str
    category_id: Optional[UUID] = None
    archetype: TopicArchetype
    visible: bool
    deleted_at: Optional[datetime] = None
    bumped_at: datetime
    tag_names: List[str] = []

    class Config:
        from_attributes = True


class TopicListResponse(BaseModel):
    category_id: UUID
    virtual: bool
    topics: List[TopicResponse]
    total: int
    page: int
    per_page: int
