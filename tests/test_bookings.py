import asyncio
from datetime import datetime

import pytest
from fastapi import HTTPException

from roomhub.domain.bookings.schemas import BookingCreate
from roomhub.domain.bookings.service import BookingService
from roomhub.models import Booking
from roomhub.services.notification_service import NotificationService


def add_booking(session, user, room, start, end, status="pending"):
    booking = Booking(user_id=user.id, room_id=room.id, start_date=start, end_date=end, status=status)
    session.add(booking)
    session.commit()
    return booking


def test_user_booking_is_attributed_to_requester(client, make_user, make_room, auth_headers):
    user = make_user()
    other = make_user()
    room = make_room()

    r = client.post(
        "/bookings",
        json={
            "room": room.id,
            "startDate": "2025-01-06T10:00:00Z",
            "endDate": "2025-01-06T11:00:00Z",
            "user": other.id,
        },
        headers=auth_headers(user),
    )
    assert r.status_code == 201
    body = r.json()
    assert body["user"]["id"] == user.id
    assert body["room"]["id"] == room.id
    assert body["status"] == "pending"


def test_admin_can_book_for_another_user(client, make_user, make_room, auth_headers):
    admin = make_user(role="admin")
    target = make_user()
    room = make_room()

    r = client.post(
        "/bookings",
        json={
            "room": room.id,
            "startDate": "2025-01-06T10:00:00Z",
            "endDate": "2025-01-06T11:00:00Z",
            "user": target.id,
        },
        headers=auth_headers(admin),
    )
    assert r.status_code == 201
    assert r.json()["user"]["id"] == target.id


def test_create_notifies_booker_and_admins(test_db_session, notifier, senders, make_user, make_room):
    admin = make_user(role="admin")
    user = make_user(fcm_token="device-1")
    room = make_room()
    service = BookingService(test_db_session, notifier)

    data = BookingCreate(
        room=room.id,
        startDate=datetime(2025, 1, 6, 10),
        endDate=datetime(2025, 1, 6, 11),
    )
    booking = asyncio.run(service.create(data, user.id, is_admin=False))

    assert booking.user_id == user.id
    templates = {(e["to"], e["template"]) for e in senders.emails}
    assert (user.email, "booking-created") in templates
    assert (admin.email, "admin-booking-created") in templates
    assert senders.pushes == [
        {"token": "device-1", "title": "Booking Created", "body": "Your booking has been successfully created."}
    ]
    # neither account has a phone number
    assert senders.sms == []


def test_unknown_room_is_rejected(client, make_user, auth_headers):
    user = make_user()
    r = client.post(
        "/bookings",
        json={"room": "missing", "startDate": "2025-01-06T10:00:00Z", "endDate": "2025-01-06T11:00:00Z"},
        headers=auth_headers(user),
    )
    assert r.status_code == 404


def test_date_filter_keeps_only_contained_bookings(test_db_session, notifier, make_user, make_room):
    user = make_user()
    room = make_room()
    inside = add_booking(test_db_session, user, room, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))
    add_booking(test_db_session, user, room, datetime(2025, 1, 6, 9), datetime(2025, 1, 6, 12))

    service = BookingService(test_db_session, notifier)
    found = service.find_by_filters(
        start_date=datetime(2025, 1, 6, 10), end_date=datetime(2025, 1, 6, 11, 30)
    )
    assert [b.id for b in found] == [inside.id]

    # a single bound is ignored
    assert len(service.find_by_filters(start_date=datetime(2025, 1, 6, 10))) == 2


def test_filter_by_room_over_http(client, test_db_session, make_user, make_room, auth_headers):
    admin = make_user(role="admin")
    user = make_user()
    room_a = make_room()
    room_b = make_room()
    add_booking(test_db_session, user, room_a, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))
    add_booking(test_db_session, user, room_b, datetime(2025, 1, 7, 10), datetime(2025, 1, 7, 11))

    r = client.get("/bookings", params={"room": room_b.id}, headers=auth_headers(admin))
    assert r.status_code == 200
    assert [b["room"] for b in r.json()] == [room_b.id]


def test_listing_all_bookings_requires_admin(client, make_user, auth_headers):
    user = make_user()
    r = client.get("/bookings", headers=auth_headers(user))
    assert r.status_code == 403


def test_status_can_move_between_any_states(client, test_db_session, make_user, make_room, auth_headers):
    admin = make_user(role="admin")
    user = make_user()
    room = make_room()
    booking = add_booking(
        test_db_session, user, room, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11), status="canceled"
    )

    r = client.patch(f"/bookings/{booking.id}/status", json={"status": "approved"}, headers=auth_headers(admin))
    assert r.status_code == 200
    assert r.json()["status"] == "approved"

    r = client.patch(f"/bookings/{booking.id}/status", json={"status": "archived"}, headers=auth_headers(admin))
    assert r.status_code == 422


def test_status_change_notifies_owner(test_db_session, notifier, senders, make_user, make_room):
    make_user(role="admin")
    user = make_user()
    room = make_room()
    booking = add_booking(test_db_session, user, room, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))

    service = BookingService(test_db_session, notifier)
    asyncio.run(service.update_status(booking.id, "approved"))

    assert [(e["to"], e["subject"], e["template"]) for e in senders.emails] == [
        (user.email, "Booking approved", "booking-approved")
    ]


def test_cancellation_also_notifies_admins(test_db_session, notifier, senders, make_user, make_room):
    admin = make_user(role="admin")
    user = make_user()
    room = make_room()
    booking = add_booking(test_db_session, user, room, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))

    service = BookingService(test_db_session, notifier)
    asyncio.run(service.update_status(booking.id, "canceled"))

    assert (user.email, "booking-canceled") in {(e["to"], e["template"]) for e in senders.emails}
    admin_mail = [e for e in senders.emails if e["to"] == admin.email]
    assert [e["template"] for e in admin_mail] == ["admin-booking-canceled"]
    assert admin_mail[0]["subject"] == "Booking Canceled"


def test_status_update_of_unknown_booking(test_db_session, notifier, senders, make_user):
    make_user(role="admin")
    service = BookingService(test_db_session, notifier)
    assert asyncio.run(service.update_status("missing", "canceled")) is None
    assert senders.total == 0


def test_other_users_booking_looks_missing(client, test_db_session, make_user, make_room, auth_headers):
    owner = make_user()
    intruder = make_user()
    admin = make_user(role="admin")
    room = make_room()
    booking = add_booking(test_db_session, owner, room, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))

    foreign = client.get(f"/bookings/{booking.id}", headers=auth_headers(intruder))
    missing = client.get("/bookings/does-not-exist", headers=auth_headers(intruder))
    assert foreign.status_code == missing.status_code == 404

    assert client.delete(f"/bookings/{booking.id}", headers=auth_headers(intruder)).status_code == 404
    assert client.get(f"/bookings/{booking.id}", headers=auth_headers(owner)).status_code == 200
    assert client.get(f"/bookings/{booking.id}", headers=auth_headers(admin)).status_code == 200


def test_owner_can_update_and_delete(client, test_db_session, make_user, make_room, auth_headers):
    owner = make_user()
    room = make_room()
    booking = add_booking(test_db_session, owner, room, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))

    r = client.put(
        f"/bookings/{booking.id}",
        json={"endDate": "2025-01-06T12:00:00Z"},
        headers=auth_headers(owner),
    )
    assert r.status_code == 200
    assert r.json()["endDate"].startswith("2025-01-06T12:00:00")

    assert client.delete(f"/bookings/{booking.id}", headers=auth_headers(owner)).status_code == 200
    assert test_db_session.query(Booking).count() == 0


def test_my_bookings(client, test_db_session, make_user, make_room, auth_headers):
    me = make_user()
    other = make_user()
    room = make_room()
    mine = add_booking(test_db_session, me, room, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))
    add_booking(test_db_session, other, room, datetime(2025, 1, 7, 10), datetime(2025, 1, 7, 11))

    r = client.get("/bookings/my", headers=auth_headers(me))
    assert r.status_code == 200
    assert [b["id"] for b in r.json()] == [mine.id]


def test_csv_export(client, test_db_session, make_user, make_room, auth_headers):
    admin = make_user(role="admin")
    user = make_user()
    room = make_room()
    booking = add_booking(test_db_session, user, room, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))

    r = client.get("/bookings/export/csv", headers=auth_headers(admin))
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "filename=bookings.csv" in r.headers["content-disposition"]

    lines = r.text.splitlines()
    assert lines[0] == "_id,user,room,startDate,endDate,status"
    assert lines[1] == f"{booking.id},{user.id},{room.id},2025-01-06T10:00:00,2025-01-06T11:00:00,pending"


def test_admin_without_target_books_for_themselves(client, make_user, make_room, auth_headers):
    admin = make_user(role="admin")
    room = make_room()

    r = client.post(
        "/bookings",
        json={"room": room.id, "startDate": "2025-01-06T10:00:00Z", "endDate": "2025-01-06T11:00:00Z"},
        headers=auth_headers(admin),
    )
    assert r.status_code == 201
    assert r.json()["user"]["id"] == admin.id


def test_failing_sender_keeps_the_booking(test_db_session, senders, make_user, make_room):
    async def broken_sms(to, message):
        raise HTTPException(status_code=500, detail="Failed to send SMS to the user")

    notifier = NotificationService(
        test_db_session, email_sender=senders.email, sms_sender=broken_sms, push_sender=senders.push
    )
    user = make_user(phone="+15550001")
    room = make_room()
    service = BookingService(test_db_session, notifier)

    data = BookingCreate(room=room.id, startDate=datetime(2025, 1, 6, 10), endDate=datetime(2025, 1, 6, 11))
    with pytest.raises(HTTPException) as exc:
        asyncio.run(service.create(data, user.id, is_admin=False))

    assert exc.value.status_code == 500
    assert test_db_session.query(Booking).count() == 1


@pytest.mark.parametrize("current", ["pending", "approved", "canceled", "refused"])
@pytest.mark.parametrize("target", ["pending", "approved", "canceled", "refused"])
def test_any_status_transition_is_accepted(test_db_session, notifier, make_user, make_room, current, target):
    user = make_user()
    room = make_room()
    booking = add_booking(
        test_db_session, user, room, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11), status=current
    )

    updated = asyncio.run(BookingService(test_db_session, notifier).update_status(booking.id, target))
    assert updated.status == target


def test_update_rejects_unknown_references(client, test_db_session, make_user, make_room, auth_headers):
    owner = make_user()
    room = make_room()
    booking = add_booking(test_db_session, owner, room, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))
    headers = auth_headers(owner)

    r = client.put(f"/bookings/{booking.id}", json={"room": "no-such-room"}, headers=headers)
    assert r.status_code == 404
    r = client.put(f"/bookings/{booking.id}", json={"user": "no-such-user"}, headers=headers)
    assert r.status_code == 404

    test_db_session.refresh(booking)
    assert booking.room_id == room.id
    assert booking.user_id == owner.id


def test_deleting_a_room_removes_its_bookings(client, test_db_session, make_user, make_room, auth_headers):
    admin = make_user(role="admin")
    room = make_room()
    add_booking(test_db_session, admin, room, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))

    assert client.delete(f"/rooms/{room.id}", headers=auth_headers(admin)).status_code == 200
    assert test_db_session.query(Booking).count() == 0
