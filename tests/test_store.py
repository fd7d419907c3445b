import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from app.modules.posts.models.post import Post
from app.modules.posts.schemas.post import PostInput
from app.modules.posts.services.post import get_user_posts, post_store
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserInput
from app.modules.user_management.services.user import delete_user, user_store
from tests.utils.factory import MISSING_ID, POST_ID_1, POST_ID_2, USER_ID_1, USER_ID_2, count


def test_get_returns_entity(seeded):
    user = user_store.get(seeded, USER_ID_1)
    assert user.id == USER_ID_1
    assert user.name == "user-1"
    assert user.email == "email-1"
    assert user.updated_at is None


def test_get_missing_returns_none(seeded):
    assert user_store.get(seeded, MISSING_ID) is None
    assert post_store.get(seeded, MISSING_ID) is None


def test_get_all_newest_first(seeded):
    assert [u.id for u in user_store.get_all(seeded)] == [USER_ID_2, USER_ID_1]
    assert [p.id for p in post_store.get_all(seeded)] == [POST_ID_2, POST_ID_1]


def test_get_all_empty(db_session):
    assert user_store.get_all(db_session) == []
    assert post_store.get_all(db_session) == []


def test_create_materializes_generated_fields(db_session):
    user = user_store.create(db_session, UserInput(name="alice", email="a@x.com"))
    db_session.commit()

    assert uuid.UUID(user.id)
    assert user.name == "alice"
    assert user.email == "a@x.com"
    assert user.created_at is not None
    assert user.updated_at is None
    assert user_store.get(db_session, user.id) == user


def test_create_post_stores_owner(seeded):
    post = post_store.create(seeded, PostInput(title="hi", content="body", user_id=uuid.UUID(USER_ID_1)))
    assert post.user_id == USER_ID_1
    assert post.title == "hi"


def test_create_post_with_unknown_owner_is_a_database_error(db_session):
    with pytest.raises(IntegrityError):
        post_store.create(db_session, PostInput(title="t", content="c", user_id=uuid.UUID(MISSING_ID)))
    db_session.rollback()
    assert count(db_session, Post) == 0


def test_update_replaces_fields_and_stamps(seeded):
    user = user_store.update(seeded, USER_ID_1, UserInput(name="renamed", email="new@x.com"))
    assert user.id == USER_ID_1
    assert user.name == "renamed"
    assert user.email == "new@x.com"
    assert user.updated_at is not None


def test_update_twice_with_same_input(seeded):
    user_in = UserInput(name="same", email="same@x.com")
    first = user_store.update(seeded, USER_ID_1, user_in)
    second = user_store.update(seeded, USER_ID_1, user_in)

    assert (first.id, first.name, first.email, first.created_at) == \
        (second.id, second.name, second.email, second.created_at)
    assert second.updated_at is not None


def test_update_missing_returns_none(seeded):
    assert user_store.update(seeded, MISSING_ID, UserInput(name="x", email="y")) is None


def test_delete_returns_last_values(seeded):
    post = post_store.delete(seeded, POST_ID_1)
    assert post.id == POST_ID_1
    assert post.title == "title-1"
    assert post_store.get(seeded, POST_ID_1) is None


def test_delete_missing_returns_none(seeded):
    assert post_store.delete(seeded, MISSING_ID) is None


def test_exists(seeded):
    assert user_store.exists(seeded, USER_ID_1)
    assert not user_store.exists(seeded, MISSING_ID)


def test_get_user_posts(seeded):
    assert [p.id for p in get_user_posts(seeded, USER_ID_2)] == [POST_ID_2]
    assert get_user_posts(seeded, MISSING_ID) == []


def test_delete_user_removes_their_posts(seeded):
    user = delete_user(seeded, USER_ID_1)
    seeded.commit()

    assert user.id == USER_ID_1
    assert count(seeded, User) == 1
    assert [p.id for p in post_store.get_all(seeded)] == [POST_ID_2]


def test_delete_user_missing_returns_none(seeded):
    assert delete_user(seeded, MISSING_ID) is None
    assert count(seeded, Post) == 2
