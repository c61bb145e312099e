"""
Tests for the activity catalog and trip activities.
"""
from decimal import Decimal
import pytest
from sqlalchemy.exc import SQLAlchemyError
from app.db.session import SessionLocal
from app.models.activity import Activity
from app.services.activity_service import DEFAULT_CATALOG, seed_activities


def _catalog_id(client, name):
    return next(a["id"] for a in client.get("/api/activities").json() if a["name"] == name)


def test_catalog_is_seeded_and_public(client):
    response = client.get("/api/activities")
    assert response.status_code == 200
    assert len(response.json()) == len(DEFAULT_CATALOG)


def test_seeding_is_idempotent(client):
    with SessionLocal() as db:
        assert seed_activities(db) == 0
        assert db.query(Activity).count() == len(DEFAULT_CATALOG)


def test_failed_seed_leaves_catalog_empty(db, monkeypatch):
    def failing_commit():
        raise SQLAlchemyError("commit failed")

    monkeypatch.setattr(db, "commit", failing_commit)
    with pytest.raises(SQLAlchemyError):
        seed_activities(db)

    assert db.query(Activity).count() == 0


def test_add_catalog_activity(client, alice):
    response = client.post(
        "/api/activities",
        json={"name": "Canyon Hike", "category": "Nature", "defaultCost": "15.50"},
        headers=alice.headers
    )
    assert response.status_code == 201
    created = response.json()
    assert created["name"] == "Canyon Hike"
    assert Decimal(created["defaultCost"]) == Decimal("15.50")

    found = client.get("/api/activities/search", params={"q": "canyon"}).json()
    assert [a["id"] for a in found] == [created["id"]]


def test_adding_catalog_activity_requires_session(client):
    response = client.post("/api/activities", json={"name": "Canyon Hike"})
    assert response.status_code == 401


def test_search_is_case_insensitive_substring(client):
    names = [a["name"] for a in client.get("/api/activities/search", params={"q": "TOWER"}).json()]
    assert names == ["Eiffel Tower Visit"]

    names = [a["name"] for a in client.get("/api/activities/search", params={"q": "tour"}).json()]
    assert set(names) == {"Colosseum Tour", "Northern Lights Tour"}


def test_search_treats_wildcards_literally(client):
    assert client.get("/api/activities/search", params={"q": "%"}).json() == []


def test_schedule_activity_at_stop(client, alice, make_trip, make_stop):
    trip = make_trip(alice)
    stop = make_stop(alice, trip["id"])

    response = client.post(
        f"/api/trip-stops/{stop['id']}/activities",
        json={"title": "Louvre", "scheduledDate": "2024-06-02T09:00:00Z", "cost": "25.00", "durationMinutes": 180},
        headers=alice.headers
    )
    assert response.status_code == 201
    created = response.json()
    assert created["tripId"] == trip["id"]
    assert created["stopId"] == stop["id"]
    assert created["scheduledDate"] == "2024-06-02T09:00:00Z"

    by_stop = client.get(f"/api/trip-stops/{stop['id']}/activities", headers=alice.headers).json()
    by_trip = client.get(f"/api/trips/{trip['id']}/activities", headers=alice.headers).json()
    assert [a["id"] for a in by_stop] == [created["id"]]
    assert [a["id"] for a in by_trip] == [created["id"]]


def test_catalog_activity_supplies_defaults(client, alice, make_trip):
    trip = make_trip(alice)
    activity_id = _catalog_id(client, "Louvre Museum")

    response = client.post(
        f"/api/trips/{trip['id']}/activities",
        json={"title": "Louvre", "activityId": activity_id},
        headers=alice.headers
    )
    assert response.status_code == 201
    assert Decimal(response.json()["cost"]) == Decimal("25.00")
    assert response.json()["description"] == "World's largest art museum"
    assert response.json()["stopId"] is None


def test_unknown_catalog_activity_is_rejected(client, alice, make_trip):
    trip = make_trip(alice)
    response = client.post(
        f"/api/trips/{trip['id']}/activities",
        json={"title": "Mystery", "activityId": 999999},
        headers=alice.headers
    )
    assert response.status_code == 400
    assert response.json()["field"] == "activityId"


def test_stop_must_belong_to_trip(client, alice, make_trip, make_stop):
    trip = make_trip(alice, title="Europe")
    other_trip = make_trip(alice, title="Japan")
    other_stop = make_stop(alice, other_trip["id"], city="Tokyo", country="Japan")

    response = client.post(
        f"/api/trips/{trip['id']}/activities",
        json={"title": "Sushi", "stopId": other_stop["id"]},
        headers=alice.headers
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Stop does not belong to this trip", "field": "stopId"}


def test_other_user_cannot_see_or_change_activities(client, alice, bob, make_trip, make_stop):
    trip = make_trip(alice)
    stop = make_stop(alice, trip["id"])
    created = client.post(
        f"/api/trip-stops/{stop['id']}/activities", json={"title": "Louvre"}, headers=alice.headers
    ).json()

    assert client.get(f"/api/trip-stops/{stop['id']}/activities", headers=bob.headers).json() == []
    assert client.get(f"/api/trips/{trip['id']}/activities", headers=bob.headers).json() == []

    assert client.post(
        f"/api/trip-stops/{stop['id']}/activities", json={"title": "Orsay"}, headers=bob.headers
    ).status_code == 403
    assert client.post(
        f"/api/trips/{trip['id']}/activities", json={"title": "Orsay"}, headers=bob.headers
    ).status_code == 403
    assert client.delete(f"/api/trip-activities/{created['id']}", headers=bob.headers).status_code == 403


def test_activity_on_missing_stop(client, alice):
    response = client.post("/api/trip-stops/999999/activities", json={"title": "Louvre"}, headers=alice.headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Stop not found"


def test_public_trip_activities_are_readable(client, alice, make_trip, make_stop):
    trip = make_trip(alice, isPublic=True)
    stop = make_stop(alice, trip["id"])
    client.post(f"/api/trip-stops/{stop['id']}/activities", json={"title": "Louvre"}, headers=alice.headers)

    assert len(client.get(f"/api/trips/{trip['id']}/activities").json()) == 1
    assert len(client.get(f"/api/trip-stops/{stop['id']}/activities").json()) == 1


def test_delete_activity_both_paths(client, alice, make_trip):
    trip = make_trip(alice)
    first = client.post(f"/api/trips/{trip['id']}/activities", json={"title": "A"}, headers=alice.headers).json()
    second = client.post(f"/api/trips/{trip['id']}/activities", json={"title": "B"}, headers=alice.headers).json()

    assert client.delete(f"/api/trip-activities/{first['id']}", headers=alice.headers).status_code == 200
    assert client.delete(f"/api/activities/{second['id']}", headers=alice.headers).status_code == 200
    assert client.delete(f"/api/trip-activities/{first['id']}", headers=alice.headers).status_code == 404
    assert client.get(f"/api/trips/{trip['id']}/activities", headers=alice.headers).json() == []
    # The catalog is untouched
    assert len(client.get("/api/activities").json()) == len(DEFAULT_CATALOG)


def test_deleting_stop_removes_its_activities(client, alice, make_trip, make_stop):
    trip = make_trip(alice)
    stop = make_stop(alice, trip["id"])
    client.post(f"/api/trip-stops/{stop['id']}/activities", json={"title": "Louvre"}, headers=alice.headers)
    client.post(f"/api/trips/{trip['id']}/activities", json={"title": "Flight"}, headers=alice.headers)

    client.delete(f"/api/stops/{stop['id']}", headers=alice.headers)

    titles = [a["title"] for a in client.get(f"/api/trips/{trip['id']}/activities", headers=alice.headers).json()]
    assert titles == ["Flight"]


def test_stop_activities_are_ordered_per_stop(client, alice, make_trip, make_stop):
    trip = make_trip(alice)
    paris = make_stop(alice, trip["id"])
    rome = make_stop(alice, trip["id"], city="Rome", country="Italy")

    client.post(f"/api/trip-stops/{paris['id']}/activities", json={"title": "Louvre"}, headers=alice.headers)
    client.post(f"/api/trip-stops/{paris['id']}/activities", json={"title": "Orsay"}, headers=alice.headers)
    first_in_rome = client.post(
        f"/api/trip-stops/{rome['id']}/activities", json={"title": "Colosseum"}, headers=alice.headers
    ).json()

    assert first_in_rome["orderIndex"] == 0
    orders = [a["orderIndex"] for a in client.get(f"/api/trip-stops/{paris['id']}/activities", headers=alice.headers).json()]
    assert orders == [0, 1]
