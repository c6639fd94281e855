# backend/tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vcat.config import Settings, get_settings
from vcat.main import app
from vcat.database import get_db
from vcat.models import (
    Base, User, UserRole, Group, GroupUser, Category, CategoryGroup,
    Tag, TagGroup, TagGroupMembership, Topic, TopicTag,
)
from vcat.services.category_metadata import CategoryMetadataService
from vcat.utils.security import get_password_hash, create_access_token


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite:///:memory:",
        virtual_category_enabled=True,
        tagging_enabled=True,
        max_virtual_tags=3,
        max_virtual_tag_groups=2,
        topics_per_page=30,
    )


@pytest.fixture
def client(db_session, settings):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ----------------------------------------------------------------------------
# Data factories
# ----------------------------------------------------------------------------

@pytest.fixture
def make_user(db_session):
    def _make(username, role=UserRole.USER, groups=()):
        user = User(
            username=username,
            email=f"{username}@example.com",
            hashed_password=get_password_hash("testpassword123"),
            role=role,
        )
        db_session.add(user)
        db_session.flush()
        for group in groups:
            db_session.add(GroupUser(group_id=group.id, user_id=user.id))
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make


@pytest.fixture
def add_to_group(db_session):
    def _add(user, group):
        db_session.add(GroupUser(group_id=group.id, user_id=user.id))
        db_session.commit()
        db_session.refresh(user)
    return _add


@pytest.fixture
def make_group(db_session):
    def _make(name):
        group = Group(name=name)
        db_session.add(group)
        db_session.commit()
        return group
    return _make


@pytest.fixture
def make_category(db_session):
    def _make(name, read_restricted=False, groups=(), reviewable_by=None):
        category = Category(
            name=name,
            slug=name.lower().replace(" ", "-"),
            read_restricted=read_restricted,
            reviewable_by_group_id=reviewable_by.id if reviewable_by else None,
        )
        db_session.add(category)
        db_session.flush()
        for group in groups:
            db_session.add(CategoryGroup(category_id=category.id, group_id=group.id))
        db_session.commit()
        db_session.refresh(category)
        return category
    return _make


@pytest.fixture
def make_tag(db_session):
    def _make(name):
        tag = Tag(name=name)
        db_session.add(tag)
        db_session.commit()
        return tag
    return _make


@pytest.fixture
def make_tag_group(db_session):
    def _make(name, tags=()):
        tag_group = TagGroup(name=name)
        db_session.add(tag_group)
        db_session.flush()
        for tag in tags:
            db_session.add(TagGroupMembership(tag_group_id=tag_group.id, tag_id=tag.id))
        db_session.commit()
        return tag_group
    return _make


@pytest.fixture
def make_topic(db_session):
    clock = {"now": datetime(2026, 1, 1, tzinfo=timezone.utc)}

    def _make(title, category=None, tags=(), **fields):
        # Each topic is bumped a minute after the previous one
        clock["now"] += timedelta(minutes=1)
        fields.setdefault("bumped_at", clock["now"])
        topic = Topic(title=title, category_id=category.id if category else None, **fields)
        db_session.add(topic)
        db_session.flush()
        for tag in tags:
            db_session.add(TopicTag(topic_id=topic.id, tag_id=tag.id))
        db_session.commit()
        return topic
    return _make


@pytest.fixture
def make_virtual(db_session):
    def _make(category, tag_names="", tag_group_names="", is_virtual=True):
        CategoryMetadataService(db_session).save_virtual_config(
            category, is_virtual=is_virtual, tag_names=tag_names, tag_group_names=tag_group_names
        )
        return category
    return _make


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}
    return _headers


@pytest.fixture
def forum(make_user, make_group, make_category, make_tag, make_topic, make_virtual):
    """The canonical virtual category layout.

    V is virtual on "testtag"; Pub is public; Priv is readable by ``group``.
    A is native to V, B and C carry "testtag" in Pub and Priv, D is an
    untagged topic in Pub.
    """
    group = make_group("insiders")
    virtual = make_category("Virtual")
    public = make_category("Public")
    private = make_category("Private", read_restricted=True, groups=[group])
    tag = make_tag("testtag")
    make_virtual(virtual, tag_names="testtag")

    topics = {
        "A": make_topic("native", virtual),
        "B": make_topic("public tagged", public, tags=[tag]),
        "C": make_topic("private tagged", private, tags=[tag]),
        "D": make_topic("public untagged", public),
    }
    return {
        "group": group,
        "virtual": virtual,
        "public": public,
        "private": private,
        "tag": tag,
        "topics": topics,
        "user": make_user("plainuser"),
        "staff": make_user("moderator", role=UserRole.STAFF),
        "admin": make_user("boss", role=UserRole.ADMIN),
    }


@pytest.fixture
def topic_names(forum):
    """Map listed topics back to the forum fixture's letters."""
    by_id = {topic.id: name for name, topic in forum["topics"].items()}

    def _names(topics):
        return sorted(by_id.get(topic.id, topic.title) for topic in topics)
    return _names
