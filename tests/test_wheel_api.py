from datetime import date, timedelta

from tests.conftest import make_food


def test_spin_returns_one_of_my_foods(client, fake_db):
    fake_db.tables["favorite_foods"] = [make_food("f1"), make_food("f2"), make_food("f3", user_id="user-2")]
    response = client.get("/api/v1/wheel/spin")
    assert response.status_code == 200
    body = response.json()
    assert body["segments"] == 2
    assert body["food"]["id"] in {"f1", "f2"}
    assert body["rotation"] >= 5 * 360


def test_spin_honours_exclusions(client, fake_db):
    fake_db.tables["favorite_foods"] = [make_food("f1"), make_food("f2")]
    response = client.get("/api/v1/wheel/spin?exclude=f1")
    assert response.json()["food"]["id"] == "f2"


def test_spin_filters_by_meal_type(client, fake_db):
    fake_db.tables["favorite_foods"] = [
        make_food("f1", meal_types=["breakfast"]),
        make_food("f2", meal_types=["dinner"]),
    ]
    response = client.get("/api/v1/wheel/spin?meal_type=dinner")
    assert response.json()["food"]["id"] == "f2"


def test_spin_rejects_unknown_meal_type(client, fake_db):
    fake_db.tables["favorite_foods"] = [make_food("f1")]
    assert client.get("/api/v1/wheel/spin?meal_type=brunch").status_code == 422


def test_spin_without_foods_is_400(client):
    response = client.get("/api/v1/wheel/spin")
    assert response.status_code == 400
    assert response.json()["detail"] == "You haven't added any favorite foods yet."


def test_swipe_right_keeps_meal(client):
    response = client.post(
        "/api/v1/wheel/swipe",
        json={"food_id": "f1", "samples": [{"x": 0, "t": 0}, {"x": 80, "t": 400}, {"x": 160, "t": 800}]},
    )
    assert response.status_code == 200
    assert response.json()["decision"] == "right"
    assert response.json()["action"] == "keep"


def test_swipe_requires_samples(client):
    response = client.post("/api/v1/wheel/swipe", json={"food_id": "f1", "samples": []})
    assert response.status_code == 422


def test_save_wheel_picks_as_plan(client, fake_db):
    fake_db.tables["favorite_foods"] = [make_food("f1", name="Pizza"), make_food("f2", name="Sushi")]
    response = client.post("/api/v1/wheel/plan", json={"food_ids": ["f2", "f1"]})
    assert response.status_code == 201
    body = response.json()
    today = date.today()
    assert body["name"] == f"Wheel Generated Plan - {today.isoformat()}"
    assert body["start_date"] == today.isoformat()
    assert body["end_date"] == (today + timedelta(days=6)).isoformat()
    first_day = body["plan"][today.isoformat()]
    assert first_day["breakfast"]["name"] == "Sushi"
    assert first_day["lunch"]["name"] == "Pizza"
    assert first_day["dinner"] is None


def test_save_wheel_plan_with_unknown_food_is_404(client, fake_db):
    fake_db.tables["favorite_foods"] = [make_food("f1")]
    response = client.post("/api/v1/wheel/plan", json={"food_ids": ["f1", "ghost"]})
    assert response.status_code == 404
