from app.modules.posts.models.post import Post
from app.modules.posts.services.post import post_store
from tests.utils.factory import MISSING_ID, POST_ID_1, POST_ID_2, USER_ID_1, USER_ID_2, count


def test_list_posts_newest_first(client, seeded):
    r = client.get("/api/posts")
    assert r.status_code == 200
    assert [p["id"] for p in r.json()] == [POST_ID_2, POST_ID_1]


def test_get_post(client, seeded):
    r = client.get(f"/api/posts/{POST_ID_1}")
    assert r.status_code == 200
    body = r.json()
    assert body["title"] == "title-1"
    assert body["content"] == "content-1"
    assert body["user_id"] == USER_ID_1
    assert "updatedAt" not in body


def test_get_missing_and_invalid(client, seeded):
    assert client.get(f"/api/posts/{MISSING_ID}").status_code == 404
    assert client.get("/api/posts/42").status_code == 400


def test_user_then_post_scenario(client):
    r = client.post("/api/users", json={"name": "alice", "email": "a@x.com"})
    assert r.status_code == 200
    user_id = r.json()["id"]

    r = client.post("/api/posts", json={"title": "hi", "content": "body", "user_id": user_id})
    assert r.status_code == 200, r.text
    post = r.json()
    assert post["user_id"] == user_id
    assert post["title"] == "hi"
    assert post["content"] == "body"

    assert client.get(f"/api/posts/{post['id']}").json() == post


def test_create_post_for_unknown_user(client, seeded):
    r = client.post("/api/posts", json={"title": "t", "content": "c", "user_id": MISSING_ID})
    assert r.status_code == 400
    assert r.json() == {"detail": "user does not exist"}
    assert len(client.get("/api/posts").json()) == 2


def test_create_post_rejects_bad_body(client, seeded):
    assert client.post("/api/posts", json={"title": "t", "content": "c", "user_id": "nope"}).status_code == 400
    assert client.post("/api/posts", content=b"").status_code == 400
    assert count(seeded, Post) == 2


def test_failure_after_insert_leaves_no_post(client, seeded, monkeypatch):
    real_create = post_store.create

    def create_then_fail(db, post_in):
        real_create(db, post_in)
        raise RuntimeError("connection lost")

    monkeypatch.setattr(post_store, "create", create_then_fail)

    r = client.post("/api/posts", json={"title": "t", "content": "c", "user_id": USER_ID_1})
    assert r.status_code == 500
    assert "connection lost" not in r.text
    assert count(seeded, Post) == 2


def test_update_post(client, seeded):
    r = client.put(
        f"/api/posts/{POST_ID_1}",
        json={"title": "new", "content": "changed", "user_id": USER_ID_2},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == POST_ID_1
    assert body["title"] == "new"
    assert body["user_id"] == USER_ID_2
    assert body["updatedAt"]


def test_update_post_for_unknown_user(client, seeded):
    r = client.put(f"/api/posts/{POST_ID_1}", json={"title": "t", "content": "c", "user_id": MISSING_ID})
    assert r.status_code == 400
    assert client.get(f"/api/posts/{POST_ID_1}").json()["title"] == "title-1"


def test_update_missing_post(client, seeded):
    r = client.put(f"/api/posts/{MISSING_ID}", json={"title": "t", "content": "c", "user_id": USER_ID_1})
    assert r.status_code == 404
    assert r.json() == {"detail": "post does not exist"}


def test_delete_post(client, seeded):
    r = client.delete(f"/api/posts/{POST_ID_1}")
    assert r.status_code == 200
    assert r.json()["id"] == POST_ID_1
    assert client.get(f"/api/posts/{POST_ID_1}").status_code == 404
    assert client.delete(f"/api/posts/{POST_ID_1}").status_code == 404


def test_delete_invalid_id(client, seeded):
    assert client.delete("/api/posts/nope").status_code == 400
