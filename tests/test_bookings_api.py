from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError

from consultdesk.domain.bookings.repository import BookingRepository
from consultdesk.models import Booking


def _at(day, hour, minute=0):
    return datetime(day.year, day.month, day.day, hour, minute)


def _payload(start, end=None, **overrides):
    body = {
        "startTime": start.isoformat(),
        "endTime": (end or start + timedelta(minutes=30)).isoformat(),
        "name": "Jane Client",
        "email": "Jane@Example.com",
        "phone": "5551234567",
    }
    body.update(overrides)
    return body


def test_create_booking(client, business_day):
    start = _at(business_day, 10)
    resp = client.post("/api/bookings", json=_payload(start, notes="Data warehouse review"))

    assert resp.status_code == 201
    data = resp.json()
    assert data["id"]
    assert datetime.fromisoformat(data["startTime"]) == start
    assert datetime.fromisoformat(data["endTime"]) == start + timedelta(minutes=30)
    assert data["email"] == "jane@example.com"
    assert data["phone"] == "(555) 123-4567"
    assert data["notes"] == "Data warehouse review"


def test_create_booking_from_date_and_time(client, business_day):
    resp = client.post(
        "/api/bookings",
        json={
            "date": business_day.isoformat(),
            "time": "14:30",
            "name": "Jane Client",
            "email": "jane@example.com",
            "phone": "(555) 123-4567",
        },
    )

    assert resp.status_code == 201
    data = resp.json()
    assert datetime.fromisoformat(data["startTime"]) == _at(business_day, 14, 30)
    assert datetime.fromisoformat(data["endTime"]) == _at(business_day, 15, 0)


def test_start_must_precede_end(client, business_day):
    start = _at(business_day, 11)
    resp = client.post("/api/bookings", json=_payload(start, end=start))

    assert resp.status_code == 400
    assert "startTime must be before endTime" in resp.json()["error"]


def test_missing_fields_rejected(client, business_day):
    resp = client.post("/api/bookings", json={"startTime": _at(business_day, 10).isoformat()})

    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing required fields"


def test_invalid_phone_rejected(client, business_day):
    resp = client.post("/api/bookings", json=_payload(_at(business_day, 10), phone="12345"))

    assert resp.status_code == 400
    assert "10 digits" in resp.json()["error"]


def test_past_booking_rejected(client, past_business_day):
    resp = client.post("/api/bookings", json=_payload(_at(past_business_day, 10)))

    assert resp.status_code == 400
    assert resp.json()["error"] == "Cannot book a time in the past"


def test_weekend_booking_rejected(client, weekend_day):
    resp = client.post("/api/bookings", json=_payload(_at(weekend_day, 10)))

    assert resp.status_code == 400
    assert "weekends" in resp.json()["error"]


def test_booking_outside_business_hours_rejected(client, business_day):
    early = client.post("/api/bookings", json=_payload(_at(business_day, 8, 30)))
    late = client.post("/api/bookings", json=_payload(_at(business_day, 16, 45)))

    assert early.status_code == 400
    assert late.status_code == 400


def test_double_booking_conflicts(client, business_day):
    start = _at(business_day, 10)
    assert client.post("/api/bookings", json=_payload(start)).status_code == 201

    same = client.post("/api/bookings", json=_payload(start, email="other@example.com"))
    overlapping = client.post(
        "/api/bookings", json=_payload(start - timedelta(minutes=30), end=start + timedelta(minutes=30))
    )
    adjacent = client.post("/api/bookings", json=_payload(start + timedelta(minutes=30)))

    assert same.status_code == 409
    assert same.json()["error"] == "This time slot is already booked"
    assert overlapping.status_code == 409
    assert adjacent.status_code == 201


def test_off_grid_booking_rejected(client, business_day):
    resp = client.post("/api/bookings", json=_payload(_at(business_day, 10, 15)))

    assert resp.status_code == 400
    assert "30-minute slot boundary" in resp.json()["error"]


def test_multi_slot_booking_holds_every_slot(client, admin_headers, business_day):
    created = client.post(
        "/api/bookings", json=_payload(_at(business_day, 10), end=_at(business_day, 11))
    ).json()

    slots = client.get("/api/bookings", params={"date": business_day.isoformat()}).json()["slots"]
    taken = {s["id"] for s in slots if not s["isAvailable"]}
    prefix = business_day.strftime("%Y-%m-%d")
    assert taken == {f"{prefix}-10-00", f"{prefix}-10-30"}

    client.delete("/api/bookings", params={"id": created["id"]}, headers=admin_headers)

    # Cancelling frees both slots for new bookings
    assert client.post("/api/bookings", json=_payload(_at(business_day, 10, 30))).status_code == 201


def test_concurrent_insert_for_same_slot_conflicts(client, business_day, monkeypatch):
    start = _at(business_day, 13)
    assert client.post("/api/bookings", json=_payload(start)).status_code == 201

    # Simulate a request whose pre-insert check ran before the first insert committed
    monkeypatch.setattr(BookingRepository, "get_bookings_between", staticmethod(lambda db, s, e: []))
    resp = client.post("/api/bookings", json=_payload(start, email="racer@example.com"))

    assert resp.status_code == 409


def test_concurrent_insert_for_overlapping_interval_conflicts(
    client, admin_headers, business_day, monkeypatch
):
    first = client.post(
        "/api/bookings", json=_payload(_at(business_day, 10), end=_at(business_day, 11))
    )
    assert first.status_code == 201

    # Different start time, stale pre-insert check: the slot reservation still collides
    monkeypatch.setattr(BookingRepository, "get_bookings_between", staticmethod(lambda db, s, e: []))
    resp = client.post(
        "/api/bookings",
        json=_payload(_at(business_day, 10, 30), end=_at(business_day, 11, 30), email="racer@example.com"),
    )
    monkeypatch.undo()

    assert resp.status_code == 409
    assert resp.json()["error"] == "This time slot is already booked"
    assert [b["id"] for b in client.get("/api/bookings", headers=admin_headers).json()] == [
        first.json()["id"]
    ]


def test_mixed_body_forms_rejected(client, business_day):
    body = _payload(_at(business_day, 10), date=business_day.isoformat(), time="14:00")

    resp = client.post("/api/bookings", json=body)

    assert resp.status_code == 400
    assert "not both" in resp.json()["error"]


def test_create_booking_database_failure(client, business_day, monkeypatch):
    def fail(db, slot_starts, **booking_data):
        raise SQLAlchemyError("database is unavailable")

    monkeypatch.setattr(BookingRepository, "create_booking", staticmethod(fail))

    resp = client.post("/api/bookings", json=_payload(_at(business_day, 10)))

    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to create booking"
    assert "database is unavailable" in resp.json()["details"]


def test_slots_for_date_reflect_bookings(client, business_day):
    client.post("/api/bookings", json=_payload(_at(business_day, 9, 30)))

    resp = client.get("/api/bookings", params={"date": business_day.isoformat()})

    assert resp.status_code == 200
    data = resp.json()
    assert data["businessDay"] is True
    assert len(data["slots"]) == 16
    by_id = {s["id"]: s for s in data["slots"]}
    prefix = business_day.strftime("%Y-%m-%d")
    assert by_id[f"{prefix}-09-30"]["isAvailable"] is False
    assert by_id[f"{prefix}-09-00"]["isAvailable"] is True
    assert by_id[f"{prefix}-10-00"]["isAvailable"] is True


def test_slots_for_past_date_are_unavailable(client, past_business_day):
    resp = client.get("/api/bookings", params={"date": past_business_day.isoformat()})

    assert resp.status_code == 200
    assert all(not s["isAvailable"] for s in resp.json()["slots"])


def test_slots_for_weekend_are_empty(client, weekend_day):
    resp = client.get("/api/bookings", params={"date": weekend_day.isoformat()})

    assert resp.status_code == 200
    assert resp.json() == {"date": weekend_day.isoformat(), "businessDay": False, "slots": []}


def test_slots_for_date_database_failure(client, business_day, monkeypatch):
    def fail(db, start, end):
        raise SQLAlchemyError("database is unavailable")

    monkeypatch.setattr(BookingRepository, "get_bookings_between", staticmethod(fail))

    resp = client.get("/api/bookings", params={"date": business_day.isoformat()})

    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to fetch availability"
    assert "database is unavailable" in resp.json()["details"]


def test_invalid_date_query_rejected(client):
    resp = client.get("/api/bookings", params={"date": "next-tuesday"})
    assert resp.status_code == 400


def test_listing_bookings_requires_admin(client):
    resp = client.get("/api/bookings")
    assert resp.status_code == 401


def test_list_returns_future_bookings_in_order(client, admin_headers, business_day, past_business_day, db):
    client.post("/api/bookings", json=_payload(_at(business_day, 15)))
    client.post("/api/bookings", json=_payload(_at(business_day, 9)))
    db.add(
        Booking(
            start_time=_at(past_business_day, 10),
            end_time=_at(past_business_day, 10, 30),
            name="Old Client",
            email="old@example.com",
            phone="(555) 000-0000",
        )
    )
    db.commit()

    resp = client.get("/api/bookings", headers=admin_headers)

    assert resp.status_code == 200
    starts = [datetime.fromisoformat(b["startTime"]) for b in resp.json()]
    assert starts == [_at(business_day, 9), _at(business_day, 15)]

    everything = client.get("/api/bookings", params={"includePast": "true"}, headers=admin_headers)
    assert len(everything.json()) == 3
    assert everything.json()[0]["name"] == "Old Client"


def test_delete_booking(client, admin_headers, business_day):
    created = client.post("/api/bookings", json=_payload(_at(business_day, 10))).json()

    resp = client.delete("/api/bookings", params={"id": created["id"]}, headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert client.get("/api/bookings", headers=admin_headers).json() == []

    # The slot opens up again
    slots = client.get("/api/bookings", params={"date": business_day.isoformat()}).json()["slots"]
    assert all(s["isAvailable"] for s in slots)


def test_delete_unknown_booking_is_an_error(client, admin_headers):
    resp = client.delete("/api/bookings", params={"id": "does-not-exist"}, headers=admin_headers)

    assert resp.status_code == 404
    assert resp.json()["error"] == "Booking not found"


def test_delete_requires_id(client, admin_headers):
    resp = client.delete("/api/bookings", headers=admin_headers)

    assert resp.status_code == 400
    assert resp.json()["error"] == "Booking ID is required"


def test_delete_requires_admin(client, business_day):
    created = client.post("/api/bookings", json=_payload(_at(business_day, 10))).json()

    resp = client.delete("/api/bookings", params={"id": created["id"]})

    assert resp.status_code == 401
