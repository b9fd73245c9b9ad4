import pytest

from tests.conftest import make_food


def test_list_friends_attaches_foods_for_accepted_only(client, fake_db):
    fake_db.rpc_results["get_friends"] = [
        {"friend_id": "user-2", "username": "sam", "status": "accepted", "is_sender": True},
        {"friend_id": "user-3", "username": "lee", "status": "pending", "is_sender": False},
    ]
    fake_db.tables["favorite_foods"] = [
        make_food("f1", user_id="user-2", name="Curry"),
        make_food("f2", user_id="user-3", name="Stew"),
    ]
    response = client.get("/api/v1/friends")
    assert response.status_code == 200
    friends = {f["friend_id"]: f for f in response.json()}
    assert [food["name"] for food in friends["user-2"]["foods"]] == ["Curry"]
    assert friends["user-3"]["foods"] == []
    assert fake_db.rpc_calls[0] == ("get_friends", {"p_user_id": "user-1"})


def test_list_friends_rpc_failure_is_500(client, fake_db):
    fake_db.errors[("rpc", "get_friends")] = RuntimeError("boom")
    response = client.get("/api/v1/friends")
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to load friends. Please try again."


def test_send_friend_request(client, fake_db):
    response = client.post("/api/v1/friends", json={"friend_id": "user-2"})
    assert response.status_code == 201
    assert response.json()["status"] == "pending"
    assert fake_db.tables["friends"][0]["user_id"] == "user-1"


def test_cannot_befriend_yourself(client):
    response = client.post("/api/v1/friends", json={"friend_id": "user-1"})
    assert response.status_code == 400


def test_duplicate_request_in_either_direction_is_400(client, fake_db):
    fake_db.tables["friends"] = [{"id": "r1", "user_id": "user-2", "friend_id": "user-1", "status": "pending"}]
    response = client.post("/api/v1/friends", json={"friend_id": "user-2"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Friend request already exists"


def test_accept_incoming_request(client, fake_db):
    fake_db.tables["friends"] = [{"id": "r1", "user_id": "user-2", "friend_id": "user-1", "status": "pending"}]
    response = client.put("/api/v1/friends/user-2", json={"status": "accepted"})
    assert response.status_code == 200
    assert fake_db.tables["friends"][0]["status"] == "accepted"


def test_cannot_accept_own_outgoing_request(client, fake_db):
    fake_db.tables["friends"] = [{"id": "r1", "user_id": "user-1", "friend_id": "user-2", "status": "pending"}]
    response = client.put("/api/v1/friends/user-2", json={"status": "accepted"})
    assert response.status_code == 404


def test_invalid_response_status_is_422(client):
    assert client.put("/api/v1/friends/user-2", json={"status": "maybe"}).status_code == 422


def test_remove_friend_deletes_both_directions(client, fake_db):
    fake_db.tables["friends"] = [
        {"id": "r1", "user_id": "user-1", "friend_id": "user-2", "status": "accepted"},
        {"id": "r2", "user_id": "user-2", "friend_id": "user-1", "status": "accepted"},
        {"id": "r3", "user_id": "user-3", "friend_id": "user-1", "status": "accepted"},
    ]
    assert client.delete("/api/v1/friends/user-2").status_code == 204
    assert [row["id"] for row in fake_db.tables["friends"]] == ["r3"]
    assert client.delete("/api/v1/friends/user-2").status_code == 404


def test_remove_friend_leaves_other_relations(client, fake_db):
    fake_db.tables["friends"] = [
        {"id": "r1", "user_id": "user-1", "friend_id": "user-2", "status": "accepted"},
        {"id": "r3", "user_id": "user-3", "friend_id": "user-1", "status": "accepted"},
    ]
    assert client.delete("/api/v1/friends/user-2").status_code == 204
    assert [row["id"] for row in fake_db.tables["friends"]] == ["r3"]


@pytest.mark.parametrize("friend_id", ["nobody),and(friend_id.eq.user-1", "user-2,status.eq.accepted", "a.b"])
def test_malformed_friend_id_is_rejected(client, fake_db, friend_id):
    fake_db.tables["friends"] = [{"id": "r3", "user_id": "user-3", "friend_id": "user-1", "status": "accepted"}]
    assert client.post("/api/v1/friends", json={"friend_id": friend_id}).status_code == 422
    assert client.delete(f"/api/v1/friends/{friend_id}").status_code == 422
    assert len(fake_db.tables["friends"]) == 1
