from postgrest.exceptions import APIError

from savorycircle.config import settings

from tests.conftest import DEFAULT_CREATED_AT


def _post(post_id="post-1", **fields):
    row = {
        "id": post_id,
        "user_id": "user-1",
        "food_id": "f1",
        "caption": "Dinner tonight",
        "image_url": None,
        "is_explore": True,
        "likes_count": 0,
        "comments_count": 0,
        "created_at": DEFAULT_CREATED_AT,
    }
    row.update(fields)
    return row


def test_create_post_via_rpc(client, fake_db):
    fake_db.rpc_results["create_post"] = lambda params: [_post(caption=params["p_caption"])]
    response = client.post("/api/v1/posts", json={"food_id": "f1", "caption": "So good"})
    assert response.status_code == 201
    assert response.json()["caption"] == "So good"
    assert fake_db.rpc_calls == [
        ("create_post", {"p_food_id": "f1", "p_caption": "So good", "p_is_explore": True})
    ]


def test_create_post_with_image_updates_row(client, fake_db):
    fake_db.tables["posts"] = [_post()]
    fake_db.rpc_results["create_post"] = [_post()]
    response = client.post(
        "/api/v1/posts",
        json={"food_id": "f1", "image_url": "https://storage.test/post-images/user-1/a.png"},
    )
    assert response.status_code == 201
    assert response.json()["image_url"] == "https://storage.test/post-images/user-1/a.png"


def test_create_post_failure_is_500(client, fake_db):
    fake_db.errors[("rpc", "create_post")] = RuntimeError("food not found")
    response = client.post("/api/v1/posts", json={"food_id": "f1"})
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to create post. Please try again."


def test_explore_and_trending_feeds(client, fake_db):
    fake_db.rpc_results["get_explore_posts"] = [_post("p1", username="sam", food_name="Curry")]
    fake_db.rpc_results["get_trending_posts"] = [_post("p2", likes_count=12)]

    explore = client.get("/api/v1/posts/explore").json()
    assert explore[0]["id"] == "p1"
    assert explore[0]["username"] == "sam"

    trending = client.get("/api/v1/posts/trending").json()
    assert trending[0]["likes_count"] == 12


def test_like_and_unlike(client, fake_db):
    response = client.post("/api/v1/posts/p1/likes")
    assert response.status_code == 201
    assert response.json() == {"post_id": "p1", "user_id": "user-1", "liked": True}
    assert fake_db.tables["post_likes"][0]["post_id"] == "p1"

    response = client.delete("/api/v1/posts/p1/likes")
    assert response.status_code == 200
    assert response.json()["liked"] is False
    assert fake_db.tables["post_likes"] == []


def test_double_like_is_400(client, fake_db):
    fake_db.errors[("post_likes", "insert")] = APIError(
        {"message": "duplicate key value violates unique constraint", "code": "23505", "hint": None, "details": None}
    )
    response = client.post("/api/v1/posts/p1/likes")
    assert response.status_code == 400


def test_comments(client, fake_db):
    response = client.post("/api/v1/posts/p1/comments", json={"content": "  Looks great  "})
    assert response.status_code == 201
    assert response.json()["content"] == "Looks great"

    comments = client.get("/api/v1/posts/p1/comments").json()
    assert [c["content"] for c in comments] == ["Looks great"]
    assert client.get("/api/v1/posts/other/comments").json() == []


def test_empty_comment_is_422(client):
    assert client.post("/api/v1/posts/p1/comments", json={"content": ""}).status_code == 422


def test_upload_post_image(client, fake_db):
    response = client.post(
        "/api/v1/posts/images",
        files={"file": ("plate.webp", b"webp bytes", "image/webp")},
    )
    assert response.status_code == 201
    bucket, key, _, _ = fake_db.storage.uploads[0]
    assert bucket == "post-images"
    assert response.json()["url"] == f"https://storage.test/post-images/{key}"


def test_upload_post_image_over_size_cap_is_413(client, fake_db, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_bytes", 4)
    response = client.post(
        "/api/v1/posts/images",
        files={"file": ("plate.webp", b"webp bytes", "image/webp")},
    )
    assert response.status_code == 413
    assert fake_db.storage.uploads == []
