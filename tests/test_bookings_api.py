import pytest

from tests.conftest import NEXT_MONDAY, NEXT_TUESDAY

BOOKINGS = "/api/v1/booking"


def create_booking(client, transport_id, seats, user_id="user-1", booking_date=NEXT_MONDAY, **extra):
    body = {"transportId": transport_id, "seats": seats, "userId": user_id, **extra}
    if booking_date is not None:
        body["bookingDate"] = booking_date.isoformat()
    return client.post(f"{BOOKINGS}/bookings", json=body)


@pytest.fixture
def transport(create_transport):
    return create_transport()


class TestCreateBookingEndpoint:
    """POST /bookings"""

    def test_created(self, client, transport):
        response = create_booking(client, transport.id, ["A1", "A2"])

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Booking created successfully"
        assert body["bookingId"]
        assert body["totalPrice"] == 1000
        assert [s["price"] for s in body["seats"]] == [500, 500]
        assert [s["seatNumber"] for s in body["seats"]] == ["A1", "A2"]
        assert body["seats"][0]["classType"] == "Economy"
        assert body["departureDateTime"] == f"{NEXT_MONDAY.isoformat()}T09:00:00"
        assert body["transportDetails"]["source"] == "Chennai"

    def test_missing_fields(self, client, transport):
        response = client.post(f"{BOOKINGS}/bookings", json={"transportId": transport.id})

        assert response.status_code == 400
        assert response.json()["reason"] == "validation_error"

    def test_malformed_date(self, client, transport):
        response = create_booking(client, transport.id, ["A1"], booking_date=None, bookingDate="next monday")

        assert response.status_code == 400
        assert response.json()["reason"] == "validation_error"
        assert response.json()["fields"]

    def test_unknown_transport(self, client):
        response = create_booking(client, "missing", ["A1"])

        assert response.status_code == 404
        assert response.json()["reason"] == "not_found"

    def test_schedule_unavailable(self, client, transport):
        response = create_booking(client, transport.id, ["A1"], booking_date=NEXT_TUESDAY)

        assert response.status_code == 400
        assert response.json() == {
            "error": "Transport not available on Tuesday",
            "reason": "schedule_unavailable",
            "availableDays": ["Monday"],
        }

    def test_seat_already_booked(self, client, transport):
        create_booking(client, transport.id, ["A1"])

        response = create_booking(client, transport.id, ["A1", "A2"], user_id="user-2")

        assert response.status_code == 400
        assert response.json()["unavailableSeats"] == ["A1"]

    def test_nonexistent_seats(self, client, transport):
        response = create_booking(client, transport.id, ["A1", "Q7"])

        assert response.status_code == 400
        assert response.json()["nonExistentSeats"] == ["Q7"]

    def test_class_mismatch(self, client, transport):
        response = create_booking(client, transport.id, ["A1"], classType="Business")

        assert response.status_code == 400
        assert response.json()["incompatibleClassSeats"] == ["A1"]
        assert response.json()["requestedClass"] == "Business"


class TestCancelBookingEndpoint:
    """POST /bookings/{id}/cancel"""

    @pytest.fixture
    def booking_id(self, client, transport):
        return create_booking(client, transport.id, ["A1"]).json()["bookingId"]

    def test_cancelled(self, client, transport, booking_id, seat_flags):
        response = client.post(f"{BOOKINGS}/bookings/{booking_id}/cancel", json={"userId": "user-1"})

        assert response.status_code == 200
        body = response.json()
        assert body["bookingId"] == booking_id
        assert body["refundPercentage"] == 100
        assert body["refundAmount"] == 500
        assert body["seats"] == ["A1"]
        assert seat_flags(transport.id)["A1"] is False

    def test_other_user(self, client, booking_id):
        response = client.post(f"{BOOKINGS}/bookings/{booking_id}/cancel", json={"userId": "user-2"})

        assert response.status_code == 403
        assert response.json()["reason"] == "not_authorized"

    def test_already_cancelled(self, client, booking_id):
        client.post(f"{BOOKINGS}/bookings/{booking_id}/cancel", json={"userId": "user-1"})

        response = client.post(f"{BOOKINGS}/bookings/{booking_id}/cancel", json={"userId": "user-1"})

        assert response.status_code == 400
        assert response.json()["reason"] == "already_cancelled"

    def test_inside_window(self, client, clock, booking_id):
        clock.advance(days=7, minutes=-30)

        response = client.post(f"{BOOKINGS}/bookings/{booking_id}/cancel", json={"userId": "user-1"})

        assert response.status_code == 400
        assert response.json()["hoursUntilDeparture"] == 1.5
        assert response.json()["cancellationWindowHours"] == 6

    def test_unknown_booking(self, client):
        response = client.post(f"{BOOKINGS}/bookings/missing/cancel", json={"userId": "user-1"})

        assert response.status_code == 404


class TestBookingListings:
    """GET endpoints"""

    def test_user_bookings(self, client, clock, transport):
        first = create_booking(client, transport.id, ["A1"]).json()["bookingId"]
        clock.advance(minutes=5)
        second = create_booking(client, transport.id, ["A2"]).json()["bookingId"]

        response = client.get(f"{BOOKINGS}/users/user-1/bookings")

        assert response.status_code == 200
        body = response.json()
        assert [b["id"] for b in body] == [second, first]
        assert body[0]["status"] == "confirmed"
        assert body[0]["transportDetails"]["name"] == "Coastal Express"
        assert body[0]["totalPrice"] == 500
        assert body[0]["refundAmount"] is None

    def test_all_bookings_paginated(self, client, clock, transport):
        for seat in ("A1", "A2", "A3"):
            create_booking(client, transport.id, [seat])
            clock.advance(minutes=1)

        response = client.get(f"{BOOKINGS}/all", params={"page": 2, "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert len(body["bookings"]) == 1
        assert body["pagination"] == {
            "currentPage": 2,
            "totalPages": 2,
            "totalBookings": 3,
            "hasMore": False,
        }

    def test_limit_out_of_range(self, client):
        response = client.get(f"{BOOKINGS}/all", params={"limit": 0})

        assert response.status_code == 400

    def test_transport_bookings(self, client, transport):
        booking_id = create_booking(client, transport.id, ["A1"]).json()["bookingId"]

        response = client.get(f"{BOOKINGS}/{transport.id}")

        assert response.status_code == 200
        body = response.json()
        assert [b["id"] for b in body["bookings"]] == [booking_id]
        assert body["transportDetails"]["destination"] == "Bengaluru"

    def test_transport_bookings_unknown_transport(self, client):
        response = client.get(f"{BOOKINGS}/missing")

        assert response.status_code == 404
        assert response.json()["reason"] == "not_found"
