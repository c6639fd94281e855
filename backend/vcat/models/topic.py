# backend/vcat/models/topic.py
from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from sqlalchemy import String, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vcat.models.base import Base, TimestampMixin, UUIDMixin, SoftDeleteMixin


class TopicArchetype(str, Enum):
    REGULAR = "regular"
    PRIVATE_MESSAGE = "private_message"
    BANNER = "banner"


DEFAULT_ARCHETYPE = TopicArchetype.REGULAR


class Topic(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "topics"

    title: Mapped[str] = mapped_column(String(255))
    # Private messages have no category
    category_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"), index=True
    )
    archetype: Mapped[TopicArchetype] = mapped_column(default=DEFAULT_ARCHETYPE, index=True)
    # Unlisted topics are hidden from non-staff listings
    visible: Mapped[bool] = mapped_column(Boolean, default=True)
    bumped_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    created_by: Mapped[Optional[UUID]] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))

    category = relationship("Category", back_populates="topics")
    topic_tags: Mapped[List["TopicTag"]] = relationship(
        "TopicTag", back_populates="topic", cascade="all, delete-orphan"
    )

    @property
    def tag_names(self) -> List[str]:
        return [tt.tag.name for tt in self.topic_tags]
