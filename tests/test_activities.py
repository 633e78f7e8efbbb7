from datetime import date

from conftest import register

TODAY = date(2025, 3, 10)
YESTERDAY = date(2025, 3, 9)


# ------------------------------
# Create
# ------------------------------
def test_create_workout_caps_points(log_activity, user_id, daily_row, profile_of):
    activity = log_activity(type="workout", duration=90, intensity="high")

    assert activity["pointsEarned"] == 120
    assert activity["userId"] == user_id
    assert activity["title"] == "Workout"
    assert activity["date"].startswith("2025-03-10T09:00")

    row = daily_row(user_id, TODAY)
    assert row["workoutsCompleted"] == 1
    assert row["pointsEarned"] == 120
    assert profile_of(user_id)["totalPoints"] == 120
    assert profile_of(user_id)["level"] == 2


def test_create_meal_without_calories(log_activity, user_id, daily_row):
    activity = log_activity(type="meal", mealType="lunch")

    assert activity["pointsEarned"] == 10
    assert activity["nutrition"] is None
    row = daily_row(user_id, TODAY)
    assert row["mealsLogged"] == 1
    assert row["totalCalories"] == 0
    assert row["totalProtein"] == 0


def test_create_meal_with_nutrition(log_activity, user_id, daily_row):
    log_activity(
        type="meal",
        calories=650,
        nutrition={"protein": 30, "carbs": 70},
    )

    row = daily_row(user_id, TODAY)
    assert row["totalCalories"] == 650
    assert row["totalProtein"] == 30
    assert row["totalCarbs"] == 70
    assert row["totalFat"] == 0


def test_create_mindfulness_sleep_hydration(log_activity, user_id, daily_row):
    assert log_activity(type="mindfulness", duration=15)["pointsEarned"] == 45
    assert log_activity(type="sleep", duration=420)["pointsEarned"] == 20
    assert log_activity(type="hydration")["pointsEarned"] == 5
    assert log_activity(type="hydration")["pointsEarned"] == 5

    row = daily_row(user_id, TODAY)
    assert row["mindfulnessMinutes"] == 15
    assert row["sleepHours"] == 420
    assert row["waterGlasses"] == 2
    assert row["pointsEarned"] == 45 + 20 + 5 + 5


def test_client_cannot_set_owner_or_points(log_activity, user_id):
    activity = log_activity(type="meal", userId=999, pointsEarned=5000)

    assert activity["userId"] == user_id
    assert activity["pointsEarned"] == 10


def test_negative_duration_scores_zero(log_activity):
    assert log_activity(type="workout", duration=-30)["pointsEarned"] == 0


def test_activity_dated_in_the_past_lands_on_that_day(log_activity, user_id, daily_row):
    log_activity(type="workout", duration=20, date="2025-03-09T18:30:00")

    assert daily_row(user_id, YESTERDAY)["pointsEarned"] == 40
    assert daily_row(user_id, TODAY) is None


def test_create_requires_valid_type(client, auth_headers):
    resp = client.post("/api/activities", json={"duration": 10}, headers=auth_headers)
    assert resp.status_code == 400

    resp = client.post("/api/activities", json={"type": "weight-log"}, headers=auth_headers)
    assert resp.status_code == 400


def test_create_rejects_bad_date(client, auth_headers):
    resp = client.post(
        "/api/activities", json={"type": "meal", "date": "next tuesday"}, headers=auth_headers
    )
    assert resp.status_code == 400


def test_non_finite_numbers_are_dropped(client, auth_headers, user_id, daily_row):
    resp = client.post(
        "/api/activities",
        data='{"type": "mindfulness", "duration": Infinity, "calories": NaN, "nutrition": {"protein": -Infinity}}',
        content_type="application/json",
        headers=auth_headers,
    )
    assert resp.status_code == 201
    activity = resp.get_json()
    assert activity["duration"] is None
    assert activity["calories"] is None
    assert activity["pointsEarned"] == 0

    row = daily_row(user_id, TODAY)
    assert row["mindfulnessMinutes"] == 0
    assert row["goalsCompleted"] == 0

    for url in ("/api/activities", "/api/stats"):
        body = client.get(url, headers=auth_headers).data
        assert b"Infinity" not in body
        assert b"NaN" not in body


def test_body_must_be_a_json_object(client, auth_headers, log_activity):
    activity = log_activity(type="meal")

    resp = client.post("/api/activities", json=[{"type": "meal"}], headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "invalid JSON body"}

    resp = client.put(f"/api/activities?id={activity['id']}", json=[{"duration": 5}], headers=auth_headers)
    assert resp.status_code == 400


# ------------------------------
# Auth
# ------------------------------
def test_requires_token(client):
    assert client.get("/api/activities").status_code == 401
    assert client.post("/api/activities", json={"type": "meal"}).status_code == 401
    assert client.get("/api/stats").status_code == 401


# ------------------------------
# List
# ------------------------------
def test_list_newest_first_with_filter_and_limit(client, auth_headers, log_activity):
    log_activity(type="meal", date="2025-03-08T08:00:00", title="old")
    log_activity(type="workout", duration=10, date="2025-03-09T08:00:00")
    log_activity(type="meal", date="2025-03-10T08:00:00", title="new")

    resp = client.get("/api/activities", headers=auth_headers)
    titles = [a["title"] for a in resp.get_json()]
    assert titles == ["new", "Workout", "old"]

    resp = client.get("/api/activities?type=meal", headers=auth_headers)
    assert [a["title"] for a in resp.get_json()] == ["new", "old"]

    resp = client.get("/api/activities?limit=1", headers=auth_headers)
    assert len(resp.get_json()) == 1


def test_list_default_limit_is_ten(client, auth_headers, log_activity):
    for _ in range(12):
        log_activity(type="hydration")

    resp = client.get("/api/activities", headers=auth_headers)
    assert len(resp.get_json()) == 10


def test_list_only_own_activities(client, auth_headers, log_activity):
    log_activity(type="meal")
    other = register(client)
    other_headers = {"Authorization": f"Bearer {other['token']}"}

    resp = client.get("/api/activities", headers=other_headers)
    assert resp.get_json() == []


# ------------------------------
# Update
# ------------------------------
def test_update_duration_adjusts_points_by_delta(client, auth_headers, log_activity, user_id, daily_row, profile_of):
    activity = log_activity(type="workout", duration=30)
    log_activity(type="meal")

    resp = client.put(
        f"/api/activities?id={activity['id']}", json={"duration": 45}, headers=auth_headers
    )
    assert resp.status_code == 200
    assert resp.get_json()["pointsEarned"] == 90

    assert profile_of(user_id)["totalPoints"] == 90 + 10
    row = daily_row(user_id, TODAY)
    assert row["pointsEarned"] == 100
    assert row["workoutsCompleted"] == 1


def test_update_lowering_points(client, auth_headers, log_activity, user_id, profile_of):
    activity = log_activity(type="mindfulness", duration=20)

    client.put(f"/api/activities?id={activity['id']}", json={"duration": 5}, headers=auth_headers)

    assert profile_of(user_id)["totalPoints"] == 15


def test_update_type_keeps_old_duration(client, auth_headers, log_activity, user_id, profile_of):
    activity = log_activity(type="workout", duration=20)

    resp = client.put(
        f"/api/activities?id={activity['id']}", json={"type": "mindfulness"}, headers=auth_headers
    )
    assert resp.get_json()["pointsEarned"] == 60
    assert profile_of(user_id)["totalPoints"] == 60


def test_update_without_point_change_leaves_rollup(client, auth_headers, log_activity, user_id, daily_row):
    activity = log_activity(type="meal", calories=300)
    before = daily_row(user_id, TODAY)

    resp = client.put(
        f"/api/activities?id={activity['id']}",
        json={"notes": "extra salad", "pointsEarned": 999},
        headers=auth_headers,
    )
    assert resp.get_json()["notes"] == "extra salad"
    assert resp.get_json()["pointsEarned"] == 10
    assert daily_row(user_id, TODAY) == before


def test_update_id_from_body(client, auth_headers, log_activity):
    activity = log_activity(type="workout", duration=10)

    resp = client.put(
        "/api/activities", json={"_id": activity["id"], "duration": 20}, headers=auth_headers
    )
    assert resp.status_code == 200
    assert resp.get_json()["pointsEarned"] == 40


def test_update_moving_date_moves_contribution(client, auth_headers, log_activity, user_id, daily_row, profile_of):
    # the day's rollup follows the activity to its new date
    activity = log_activity(type="workout", duration=30)

    resp = client.put(
        f"/api/activities?id={activity['id']}",
        json={"date": "2025-03-09T07:00:00", "duration": 40},
        headers=auth_headers,
    )
    assert resp.status_code == 200

    today = daily_row(user_id, TODAY)
    assert today["pointsEarned"] == 0
    assert today["workoutsCompleted"] == 0

    yesterday = daily_row(user_id, YESTERDAY)
    assert yesterday["pointsEarned"] == 80
    assert yesterday["workoutsCompleted"] == 1
    assert profile_of(user_id)["totalPoints"] == 80


def test_type_change_then_date_move_recounts_both_days(client, auth_headers, log_activity, user_id, daily_row, profile_of):
    activity = log_activity(type="workout", duration=20)
    url = f"/api/activities?id={activity['id']}"

    assert client.put(url, json={"type": "mindfulness"}, headers=auth_headers).status_code == 200
    assert client.put(url, json={"date": "2025-03-09T07:00:00"}, headers=auth_headers).status_code == 200

    today = daily_row(user_id, TODAY)
    assert today["workoutsCompleted"] == 0
    assert today["mindfulnessMinutes"] == 0
    assert today["pointsEarned"] == 0
    assert today["goalsCompleted"] == 0
    assert today["streakMaintained"] is False

    yesterday = daily_row(user_id, YESTERDAY)
    assert yesterday["workoutsCompleted"] == 0
    assert yesterday["mindfulnessMinutes"] == 20
    assert yesterday["pointsEarned"] == 60
    assert yesterday["goalsCompleted"] == 1
    assert profile_of(user_id)["totalPoints"] == 60


def test_update_errors(client, auth_headers, log_activity):
    activity = log_activity(type="meal")

    assert client.put("/api/activities", json={"duration": 5}, headers=auth_headers).status_code == 400
    assert client.put("/api/activities?id=424242", json={}, headers=auth_headers).status_code == 404

    other = register(client)
    other_headers = {"Authorization": f"Bearer {other['token']}"}
    resp = client.put(f"/api/activities?id={activity['id']}", json={"duration": 5}, headers=other_headers)
    assert resp.status_code == 404


# ------------------------------
# Delete
# ------------------------------
def test_create_then_delete_restores_totals(client, auth_headers, log_activity, user_id, daily_row, profile_of):
    log_activity(type="meal", calories=500, nutrition={"protein": 20, "carbs": 50, "fat": 10})
    before_row = daily_row(user_id, TODAY)
    before_points = profile_of(user_id)["totalPoints"]

    activity = log_activity(type="meal", calories=300, nutrition={"protein": 10, "fat": 5})
    resp = client.delete(f"/api/activities?id={activity['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Activity deleted successfully"}

    after_row = daily_row(user_id, TODAY)
    for key in ("pointsEarned", "mealsLogged", "totalCalories", "totalProtein", "totalCarbs", "totalFat"):
        assert after_row[key] == before_row[key]
    assert profile_of(user_id)["totalPoints"] == before_points


def test_delete_reverses_type_counters(client, auth_headers, log_activity, user_id, daily_row):
    w = log_activity(type="workout", duration=25)
    m = log_activity(type="mindfulness", duration=12)
    h = log_activity(type="hydration")

    for a in (w, m, h):
        client.delete(f"/api/activities?id={a['id']}", headers=auth_headers)

    row = daily_row(user_id, TODAY)
    assert row["workoutsCompleted"] == 0
    assert row["mindfulnessMinutes"] == 0
    assert row["waterGlasses"] == 0
    assert row["pointsEarned"] == 0


def test_delete_errors(client, auth_headers, log_activity):
    activity = log_activity(type="meal")

    assert client.delete("/api/activities", headers=auth_headers).status_code == 400
    assert client.delete("/api/activities?id=424242", headers=auth_headers).status_code == 404

    other = register(client)
    other_headers = {"Authorization": f"Bearer {other['token']}"}
    resp = client.delete(f"/api/activities?id={activity['id']}", headers=other_headers)
    assert resp.status_code == 404


# ------------------------------
# Per-type stats
# ------------------------------
def test_activity_type_stats(client, auth_headers, log_activity):
    log_activity(type="workout", duration=30, date="2025-03-08T10:00:00")
    log_activity(type="workout", duration=90, date="2025-03-09T10:00:00")
    log_activity(type="meal")

    resp = client.get("/api/activities/stats", headers=auth_headers)
    assert resp.status_code == 200
    stats = {s["type"]: s for s in resp.get_json()}

    assert stats["workout"]["count"] == 2
    assert stats["workout"]["totalPoints"] == 60 + 120
    assert stats["workout"]["lastActivity"].startswith("2025-03-09T10:00")
    assert stats["meal"]["count"] == 1
    assert stats["meal"]["totalPoints"] == 10
    assert stats["sleep"] == {"type": "sleep", "count": 0, "lastActivity": None, "totalPoints": 0}


# ------------------------------
# Failure handling
# ------------------------------
def test_failed_rollup_write_rolls_back_everything(client, auth_headers, user_id, profile_of, monkeypatch):
    from wellness.services import activity_service

    def boom(*args, **kwargs):
        raise RuntimeError("store unavailable")

    monkeypatch.setattr(activity_service, "apply_to_day", boom)

    resp = client.post("/api/activities", json={"type": "meal"}, headers=auth_headers)
    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Internal server error"}

    monkeypatch.undo()
    assert client.get("/api/activities", headers=auth_headers).get_json() == []
    assert profile_of(user_id)["totalPoints"] == 0
