from roomhub.domain.rooms.service import RoomService


def test_public_rooms_are_active_and_reservable(client, make_room):
    public = make_room(name="Open")
    make_room(name="Inactive", is_active=False)
    make_room(name="Not reservable", is_reservable=False)

    r = client.get("/rooms/public")
    assert r.status_code == 200
    assert [room["id"] for room in r.json()] == [public.id]


def test_public_room_by_id_hides_non_public(client, make_room):
    public = make_room()
    hidden = make_room(is_reservable=False)

    assert client.get(f"/rooms/public/{public.id}").status_code == 200

    r = client.get(f"/rooms/public/{hidden.id}")
    assert r.status_code == 404
    assert "not found or not public" in r.json()["detail"]


def test_find_public_by_id_returns_none(test_db_session, make_room):
    room = make_room(is_active=False)
    assert RoomService(test_db_session).find_public_by_id(room.id) is None


def test_admin_room_crud(client, make_user, auth_headers):
    headers = auth_headers(make_user(role="admin"))
    payload = {
        "name": "Studio A",
        "type": "studio",
        "capacity": 4,
        "pricePerHour": 20,
        "isReservable": True,
        "availabilitySchedule": {
            "monday": {"open": "09:00", "close": "17:00"},
            "tuesday": {"open": "09:00", "close": "17:00"},
            "wednesday": {"open": "09:00", "close": "17:00"},
            "thursday": {"open": "09:00", "close": "17:00"},
            "friday": {"open": "09:00", "close": "17:00"},
            "saturday": {"open": None, "close": None},
            "sunday": {"open": None, "close": None},
        },
    }

    r = client.post("/rooms", json=payload, headers=headers)
    assert r.status_code == 201
    room = r.json()
    assert room["isActive"] is True
    assert room["availabilitySchedule"]["sunday"] == {"open": None, "close": None}

    assert client.post("/rooms", json=payload, headers=headers).status_code == 409

    r = client.patch(f"/rooms/{room['id']}", json={"capacity": 8}, headers=headers)
    assert r.status_code == 200
    assert r.json()["capacity"] == 8
    assert r.json()["name"] == "Studio A"

    assert client.delete(f"/rooms/{room['id']}", headers=headers).json() == {"message": "Room deleted"}
    assert client.get(f"/rooms/{room['id']}", headers=headers).status_code == 404


def test_room_validation(client, make_user, auth_headers):
    headers = auth_headers(make_user(role="admin"))

    r = client.post("/rooms", json={"name": "Pool", "type": "swimming"}, headers=headers)
    assert r.status_code == 422

    bad_schedule = {day: {"open": "25:00", "close": "18:00"} for day in (
        "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"
    )}
    r = client.post(
        "/rooms", json={"name": "Late", "type": "meeting", "availabilitySchedule": bad_schedule}, headers=headers
    )
    assert r.status_code == 422


def test_room_admin_requires_admin(client, make_user, auth_headers):
    r = client.get("/rooms", headers=auth_headers(make_user()))
    assert r.status_code == 403
