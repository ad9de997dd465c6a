import threading
from datetime import datetime, time, timedelta

import pytest

from src.models import Booking
from src.bookings.booking_service import BookingService
from src.bookings.schemas import BookingCreateRequest, BookingCancelRequest, BookingCreated, BookingCancelled, BookingStatus
from src.bookings.exceptions import SeatUnavailableError, TransactionConflictError, AlreadyCancelledError

from tests.conftest import NEXT_MONDAY


@pytest.fixture
def run_together(session_factory):
    """Run one call per argument in its own thread and session, released at the same moment"""

    def _run(call, arguments, expected_errors):
        barrier = threading.Barrier(len(arguments))
        outcomes = []
        lock = threading.Lock()

        def worker(argument):
            session = session_factory()
            try:
                barrier.wait()
                outcome = call(session, argument)
            except expected_errors as exc:
                outcome = exc
            finally:
                session.close()
            with lock:
                outcomes.append(outcome)

        threads = [threading.Thread(target=worker, args=(argument,)) for argument in arguments]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=60)
        return outcomes

    return _run


def booking_request(transport, seat, user_id):
    return BookingCreateRequest(
        transport_id=transport.id, seats=[seat], user_id=user_id, booking_date=NEXT_MONDAY
    )


class TestConcurrentBookings:
    """Competing requests for the same seat"""

    def test_same_seat_is_allocated_once(self, session_factory, create_transport, clock, seat_flags, run_together):
        transport = create_transport()

        outcomes = run_together(
            lambda session, user_id: BookingService(session, clock=clock).create_booking(
                booking_request(transport, "A1", user_id)
            ),
            ["user-1", "user-2"],
            (SeatUnavailableError, TransactionConflictError),
        )

        assert len(outcomes) == 2
        assert len([o for o in outcomes if isinstance(o, BookingCreated)]) == 1
        assert seat_flags(transport.id)["A1"] is True

        session = session_factory()
        try:
            bookings = session.query(Booking).filter(Booking.transport_id == transport.id).all()
            assert len(bookings) == 1
            assert [s.seat_number for s in bookings[0].seats] == ["A1"]
        finally:
            session.close()

    def test_disjoint_seats_both_succeed(self, session_factory, create_transport, clock, seat_flags, run_together):
        transport = create_transport()

        outcomes = run_together(
            lambda session, args: BookingService(session, clock=clock).create_booking(
                booking_request(transport, *args)
            ),
            [("A1", "user-1"), ("A2", "user-2")],
            TransactionConflictError,
        )

        assert len([o for o in outcomes if isinstance(o, BookingCreated)]) == 2
        flags = seat_flags(transport.id)
        assert flags["A1"] is True
        assert flags["A2"] is True
        assert flags["A3"] is False


class TestConcurrentCancellations:
    """Competing cancellations of the same booking"""

    def test_booking_is_refunded_once(self, session_factory, create_transport, clock, seat_flags, run_together):
        transport = create_transport()
        session = session_factory()
        try:
            created = BookingService(session, clock=clock).create_booking(
                booking_request(transport, "A1", "user-1")
            )
        finally:
            session.close()
        clock.now = datetime.combine(NEXT_MONDAY, time(9, 0)) - timedelta(hours=30)

        outcomes = run_together(
            lambda session, user_id: BookingService(session, clock=clock).cancel_booking(
                created.booking_id, BookingCancelRequest(user_id=user_id)
            ),
            ["user-1", "user-1"],
            (AlreadyCancelledError, TransactionConflictError),
        )

        assert len(outcomes) == 2
        cancelled = [o for o in outcomes if isinstance(o, BookingCancelled)]
        assert len(cancelled) == 1
        assert cancelled[0].refund_percentage == 90
        assert seat_flags(transport.id)["A1"] is False

        session = session_factory()
        try:
            stored = session.get(Booking, created.booking_id)
            assert stored.status == BookingStatus.CANCELLED.value
            assert stored.refund_percentage == 90
            assert stored.refund_amount == cancelled[0].refund_amount
            assert stored.cancelled_at == clock.now
        finally:
            session.close()
