"""
Tests for trip endpoints and ownership scoping.
"""


def test_create_and_get_trip(client, alice, make_trip):
    trip = make_trip(alice, title="Europe", description="Summer", startDate="2024-06-01", endDate="2024-06-20")
    assert trip["ownerId"] == alice.id
    assert trip["isPublic"] is False

    response = client.get(f"/api/trips/{trip['id']}", headers=alice.headers)
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Europe"
    assert body["startDate"] == "2024-06-01"
    assert body["accessRole"] == "owner"


def test_list_trips_only_returns_own(client, alice, bob, make_trip):
    make_trip(alice, title="Europe")
    make_trip(alice, title="Japan")
    make_trip(bob, title="Peru")

    titles = {trip["title"] for trip in client.get("/api/trips", headers=alice.headers).json()}
    assert titles == {"Europe", "Japan"}


def test_trips_require_authentication(client):
    assert client.get("/api/trips").status_code == 401
    assert client.post("/api/trips", json={"title": "Europe"}).status_code == 401


def test_other_users_trip_is_not_found(client, alice, bob, make_trip):
    trip = make_trip(alice)
    url = f"/api/trips/{trip['id']}"

    assert client.get(url, headers=bob.headers).status_code == 404
    assert client.patch(url, json={"title": "Mine"}, headers=bob.headers).status_code == 404
    assert client.delete(url, headers=bob.headers).status_code == 404
    assert client.get(url).status_code == 404

    # Same answer as a trip that never existed
    missing = client.get("/api/trips/999999", headers=bob.headers)
    assert missing.status_code == 404
    assert missing.json() == client.get(url, headers=bob.headers).json()


def test_update_trip(client, alice, make_trip):
    trip = make_trip(alice)
    response = client.patch(
        f"/api/trips/{trip['id']}",
        json={"description": "Rail trip", "isPublic": True},
        headers=alice.headers
    )
    assert response.status_code == 200
    assert response.json()["description"] == "Rail trip"
    assert response.json()["isPublic"] is True
    assert response.json()["title"] == "Europe"


def test_update_trip_rejects_inverted_dates(client, alice, make_trip):
    trip = make_trip(alice, startDate="2024-06-10")
    response = client.patch(f"/api/trips/{trip['id']}", json={"endDate": "2024-06-01"}, headers=alice.headers)
    assert response.status_code == 400
    assert response.json()["field"] == "endDate"


def test_create_trip_validation(client, alice):
    response = client.post("/api/trips", json={"description": "no title"}, headers=alice.headers)
    assert response.status_code == 400
    assert response.json()["field"] == "title"

    response = client.post(
        "/api/trips",
        json={"title": "Backwards", "startDate": "2024-06-10", "endDate": "2024-06-01"},
        headers=alice.headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "End date must be on or after start date"


def test_delete_trip(client, alice, make_trip):
    trip = make_trip(alice)
    url = f"/api/trips/{trip['id']}"

    assert client.delete(url, headers=alice.headers).status_code == 200
    assert client.get(url, headers=alice.headers).status_code == 404
    # Deleting again is a plain 404
    assert client.delete(url, headers=alice.headers).status_code == 404


def test_delete_trip_removes_children(client, alice, make_trip, make_stop):
    trip = make_trip(alice)
    stop = make_stop(alice, trip["id"])
    client.post(
        f"/api/trips/{trip['id']}/budgets",
        json={"category": "Hotels", "amount": "500"},
        headers=alice.headers
    )

    client.delete(f"/api/trips/{trip['id']}", headers=alice.headers)

    assert client.delete(f"/api/stops/{stop['id']}", headers=alice.headers).status_code == 404
    assert client.get(f"/api/trips/{trip['id']}/budgets", headers=alice.headers).json() == []


def test_public_trip_is_readable_anonymously(client, alice, bob, make_trip, make_stop):
    trip = make_trip(alice, isPublic=True)
    make_stop(alice, trip["id"])
    url = f"/api/trips/{trip['id']}"

    response = client.get(url)
    assert response.status_code == 200
    assert response.json()["title"] == "Europe"
    assert response.json()["accessRole"] == "public"
    assert len(client.get(f"{url}/stops").json()) == 1

    # Reading does not grant mutation
    assert client.delete(url).status_code == 401
    assert client.delete(url, headers=bob.headers).status_code == 404
    assert client.patch(url, json={"isPublic": False}, headers=bob.headers).status_code == 404
    assert client.get(url, headers=alice.headers).status_code == 200


def test_unpublishing_hides_trip(client, alice, make_trip):
    trip = make_trip(alice, isPublic=True)
    url = f"/api/trips/{trip['id']}"
    client.patch(url, json={"isPublic": False}, headers=alice.headers)
    assert client.get(url).status_code == 404
