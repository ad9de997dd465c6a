"""
Booking error taxonomy.

Every failure of the booking transaction manager is raised as a subclass of
``BookingError``. Each carries the HTTP status it maps to, a machine-readable
``reason`` and the offending entities in ``details`` (keys are the JSON field
names returned to clients).
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional


class BookingError(Exception):
    status_code = 500
    reason = "booking_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.message, "reason": self.reason}
        body.update(self.details)
        return body


class ValidationError(BookingError):
    status_code = 400
    reason = "validation_error"


class NotFoundError(BookingError):
    status_code = 404
    reason = "not_found"


class ScheduleError(BookingError):
    status_code = 400
    reason = "schedule_unavailable"

    def __init__(self, day: str, available_days: List[str]):
        super().__init__(
            f"Transport not available on {day}",
            {"availableDays": list(available_days)},
        )
        self.day = day
        self.available_days = list(available_days)


class TimingError(BookingError):
    status_code = 400
    reason = "departure_in_past"


class SeatNotFoundError(BookingError):
    status_code = 400
    reason = "seats_not_found"

    def __init__(self, seats: List[str]):
        super().__init__("Some seats do not exist", {"nonExistentSeats": list(seats)})
        self.seats = list(seats)


class SeatUnavailableError(BookingError):
    status_code = 400
    reason = "seats_unavailable"

    def __init__(self, seats: List[str]):
        super().__init__("Some seats are already booked", {"unavailableSeats": list(seats)})
        self.seats = list(seats)


class SeatClassMismatchError(BookingError):
    status_code = 400
    reason = "seat_class_mismatch"

    def __init__(self, seats: List[str], requested_class: str):
        super().__init__(
            f"Some seats are not in the requested class ({requested_class})",
            {"incompatibleClassSeats": list(seats), "requestedClass": requested_class},
        )
        self.seats = list(seats)
        self.requested_class = requested_class


class DataIntegrityError(BookingError):
    status_code = 500
    reason = "data_integrity"


class AuthorizationError(BookingError):
    status_code = 403
    reason = "not_authorized"


class AlreadyCancelledError(BookingError):
    status_code = 400
    reason = "already_cancelled"


class CancellationWindowError(BookingError):
    status_code = 400
    reason = "cancellation_window"

    def __init__(self, hours_until_departure: float, window_hours: int):
        rounded = float(Decimal(str(hours_until_departure)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
        super().__init__(
            f"Cancellations must be made at least {window_hours} hours before departure",
            {"hoursUntilDeparture": rounded, "cancellationWindowHours": window_hours},
        )
        self.hours_until_departure = rounded


class TransactionConflictError(BookingError):
    """The store aborted the unit of work, e.g. a lock or serialization conflict."""
    status_code = 500
    reason = "transaction_conflict"


class UnknownError(BookingError):
    status_code = 500
    reason = "unknown_error"
