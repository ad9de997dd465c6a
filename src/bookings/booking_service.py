import logging
from contextlib import contextmanager
from datetime import datetime, date
from decimal import Decimal
from typing import Callable, Dict, Iterator, List, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models import Booking, BookingSeat, Seat, Transport
from src.schemas import WEEKDAYS
from src.transports.schemas import TransportSummary, parse_time_of_day
from src.bookings.schemas import (
    BookingCreateRequest, BookingCancelRequest, BookingCreated, BookingCancelled,
    BookingStatus, SeatPrice
)
from src.bookings.exceptions import (
    BookingError, ValidationError, NotFoundError, ScheduleError, TimingError,
    SeatNotFoundError, SeatUnavailableError, SeatClassMismatchError, DataIntegrityError,
    AuthorizationError, AlreadyCancelledError, CancellationWindowError,
    TransactionConflictError, UnknownError
)
from src.bookings.refund_policy import CANCELLATION_WINDOW_HOURS, refund_percentage, refund_amount

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class BookingService:
    """
    Transaction manager for seat bookings.

    Creation and cancellation each run as one unit of work on the session:
    the seat snapshot is read, validated and flipped inside the same
    transaction that writes the booking, and both commit or roll back
    together. Seats are flipped with conditional updates, so a concurrent
    booking that already took a seat makes this one fail instead of
    double-allocating it.
    """

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock or datetime.now

    def create_booking(self, request: BookingCreateRequest) -> BookingCreated:
        """Reserve the requested seats and record a confirmed booking"""

        with self._transaction("creation"):
            seat_numbers = self._validate_create_request(request)

            transport = (
                self.db.query(Transport)
                .filter(Transport.id == request.transport_id)
                .with_for_update()
                .populate_existing()
                .first()
            )
            if not transport:
                raise NotFoundError("Transport not found")

            now = self.clock()

            if request.booking_date:
                day = WEEKDAYS[request.booking_date.weekday()]
                if day not in transport.available_days:
                    raise ScheduleError(day, transport.available_days)

            departure = self._departure_date_time(
                request.booking_date or now.date(), transport.departure_time
            )
            if departure < now:
                raise TimingError("Cannot book transport for past departure times")

            seats = self._load_seats(transport.id, seat_numbers)
            self._check_seats(seat_numbers, seats, request.class_type)
            snapshot = self._price_seats(transport, seat_numbers, seats)
            total_price = sum((s.price for s in snapshot), Decimal("0"))

            self._flip_seats(transport.id, seat_numbers)

            booking = Booking(
                transport_id=transport.id,
                user_id=request.user_id,
                total_price=total_price,
                booking_date=now,
                departure_date_time=departure,
                status=BookingStatus.CONFIRMED.value,
                seats=[
                    BookingSeat(
                        position=position,
                        seat_number=s.seat_number,
                        class_type=s.class_type,
                        price=s.price
                    ) for position, s in enumerate(snapshot)
                ]
            )
            self.db.add(booking)
            self.db.flush()

            result = BookingCreated(
                booking_id=booking.id,
                total_price=total_price,
                seats=snapshot,
                booking_date=now,
                departure_date_time=departure,
                transport_details=TransportSummary.model_validate(transport)
            )

        logger.info(
            "Booking %s created on transport %s: %d seat(s), total %s",
            result.booking_id, request.transport_id, len(snapshot), total_price
        )
        return result

    def cancel_booking(self, booking_id: str, request: BookingCancelRequest) -> BookingCancelled:
        """Cancel a confirmed booking, free its seats and record the refund"""

        with self._transaction("cancellation"):
            if not booking_id:
                raise ValidationError("Booking ID is required")

            booking = (
                self.db.query(Booking)
                .filter(Booking.id == booking_id)
                .with_for_update()
                .populate_existing()
                .first()
            )
            if not booking:
                raise NotFoundError("Booking not found")

            if booking.user_id != request.user_id:
                raise AuthorizationError("Not authorized to cancel this booking")

            if booking.status == BookingStatus.CANCELLED.value:
                raise AlreadyCancelledError("Booking is already cancelled")

            now = self.clock()
            if booking.departure_date_time < now:
                raise TimingError("Cannot cancel booking for a trip that has already departed")

            hours_until_departure = (booking.departure_date_time - now).total_seconds() / 3600
            if hours_until_departure < CANCELLATION_WINDOW_HOURS:
                raise CancellationWindowError(hours_until_departure, CANCELLATION_WINDOW_HOURS)

            percentage = refund_percentage(hours_until_departure)

            transport = (
                self.db.query(Transport)
                .filter(Transport.id == booking.transport_id)
                .with_for_update()
                .populate_existing()
                .first()
            )
            if not transport:
                raise NotFoundError("Transport not found")

            seat_numbers = [s.seat_number for s in booking.seats]
            self.db.execute(
                update(Seat)
                .where(
                    Seat.transport_id == transport.id,
                    Seat.seat_number.in_(seat_numbers)
                )
                .values(is_booked=False)
            )

            amount = refund_amount(booking.total_price, percentage)

            # Only one cancellation may move the booking out of confirmed
            claimed = self.db.execute(
                update(Booking)
                .where(
                    Booking.id == booking.id,
                    Booking.status == BookingStatus.CONFIRMED.value
                )
                .values(
                    status=BookingStatus.CANCELLED.value,
                    cancelled_at=now,
                    refund_amount=amount,
                    refund_percentage=percentage
                )
            )
            if claimed.rowcount != 1:
                raise AlreadyCancelledError("Booking is already cancelled")

            result = BookingCancelled(
                booking_id=booking.id,
                refund_amount=amount,
                refund_percentage=percentage,
                cancelled_at=now,
                seats=seat_numbers
            )

        logger.info(
            "Booking %s cancelled: refund %s (%d%%), %d seat(s) released",
            booking_id, amount, percentage, len(seat_numbers)
        )
        return result

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        """Commit on success; roll back and translate every failure"""
        try:
            yield
            self.db.commit()
        except BookingError as exc:
            self.db.rollback()
            logger.info("Booking %s rejected: %s", operation, exc.reason)
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning("Booking %s aborted by the database: %s", operation, exc)
            raise TransactionConflictError(
                f"Booking {operation} could not be committed, please retry"
            ) from exc
        except Exception as exc:
            self.db.rollback()
            logger.exception("Unexpected error during booking %s", operation)
            raise UnknownError(str(exc)) from exc

    def _validate_create_request(self, request: BookingCreateRequest) -> List[str]:
        if not request.transport_id or not request.seats or not request.user_id:
            raise ValidationError("Transport ID, seat numbers, user ID are required")

        seat_numbers = list(request.seats)
        if any(not s for s in seat_numbers):
            raise ValidationError("Seat numbers must not be empty")

        seen = set()
        duplicates = []
        for seat_number in seat_numbers:
            if seat_number in seen and seat_number not in duplicates:
                duplicates.append(seat_number)
            seen.add(seat_number)
        if duplicates:
            raise ValidationError(
                "Seat numbers must not repeat", {"duplicateSeats": duplicates}
            )

        return seat_numbers

    @staticmethod
    def _departure_date_time(travel_date: date, departure_time: str) -> datetime:
        return datetime.combine(travel_date, parse_time_of_day(departure_time))

    def _load_seats(self, transport_id: str, seat_numbers: List[str]) -> Dict[str, Seat]:
        rows = (
            self.db.query(Seat)
            .filter(
                Seat.transport_id == transport_id,
                Seat.seat_number.in_(seat_numbers)
            )
            .with_for_update()
            .populate_existing()
            .all()
        )
        return {seat.seat_number: seat for seat in rows}

    @staticmethod
    def _check_seats(seat_numbers: List[str], seats: Dict[str, Seat], class_type: Optional[str]) -> None:
        """Sort each requested seat into one bucket and fail with the first non-empty one"""
        not_found = []
        unavailable = []
        mismatched = []

        for seat_number in seat_numbers:
            seat = seats.get(seat_number)
            if seat is None:
                not_found.append(seat_number)
            elif seat.is_booked:
                unavailable.append(seat_number)
            elif class_type and seat.class_type != class_type:
                mismatched.append(seat_number)

        if not_found:
            raise SeatNotFoundError(not_found)
        if unavailable:
            raise SeatUnavailableError(unavailable)
        if mismatched:
            raise SeatClassMismatchError(mismatched, class_type)

    @staticmethod
    def _price_seats(transport: Transport, seat_numbers: List[str], seats: Dict[str, Seat]) -> List[SeatPrice]:
        prices = {c.name: c.price for c in transport.classes}
        snapshot = []
        for seat_number in seat_numbers:
            seat = seats[seat_number]
            if seat.class_type not in prices:
                raise DataIntegrityError(
                    f"Class definition not found for seat {seat_number} with class {seat.class_type}",
                    {"seatNumber": seat_number, "classType": seat.class_type}
                )
            snapshot.append(SeatPrice(
                seat_number=seat_number,
                class_type=seat.class_type,
                price=prices[seat.class_type]
            ))
        return snapshot

    def _flip_seats(self, transport_id: str, seat_numbers: List[str]) -> None:
        """Mark seats booked, failing if any was taken since the snapshot was read"""
        lost = []
        for seat_number in seat_numbers:
            flipped = self.db.execute(
                update(Seat)
                .where(
                    Seat.transport_id == transport_id,
                    Seat.seat_number == seat_number,
                    Seat.is_booked == False
                )
                .values(is_booked=True)
            )
            if flipped.rowcount != 1:
                lost.append(seat_number)

        if lost:
            raise SeatUnavailableError(lost)
