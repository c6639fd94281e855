# backend/vcat/models/tag.py
from uuid import UUID

from sqlalchemy import String, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vcat.models.base import Base, TimestampMixin, UUIDMixin


class Tag(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(100), unique=True, index=True)


class TagGroup(Base, UUIDMixin, TimestampMixin):
    """A named set of tags. Matching a group matches every member tag."""
    __tablename__ = "tag_groups"

    name: Mapped[str] = mapped_column(String(100), unique=True, index=True)

    memberships = relationship(
        "TagGroupMembership", back_populates="tag_group", cascade="all, delete-orphan"
    )


class TagGroupMembership(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "tag_group_memberships"

    tag_group_id: Mapped[UUID] = mapped_column(ForeignKey("tag_groups.id", ondelete="CASCADE"))
    tag_id: Mapped[UUID] = mapped_column(ForeignKey("tags.id", ondelete="CASCADE"))

    tag_group = relationship("TagGroup", back_populates="memberships")
    tag = relationship("Tag")

    __table_args__ = (
        UniqueConstraint('tag_group_id', 'tag_id', name='uq_tag_group_membership'),
    )


class TopicTag(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "topic_tags"

    topic_id: Mapped[UUID] = mapped_column(ForeignKey("topics.id", ondelete="CASCADE"))
    tag_id: Mapped[UUID] = mapped_column(ForeignKey("tags.id", ondelete="CASCADE"))

    topic = relationship("Topic", back_populates="topic_tags")
    tag = relationship("Tag")

    __table_args__ = (
        UniqueConstraint('topic_id', 'tag_id', name='uq_topic_tag'),
        Index('ix_topic_tags_by_tag', 'tag_id', 'topic_id'),
    )
