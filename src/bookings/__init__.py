"""
Booking Module

Seat booking for transports. It includes:

- Booking creation: validates schedule, timing and seat eligibility, prices
  the seats and reserves them atomically with the booking record
- Cancellation with a graduated, time-to-departure refund policy
- Read-only booking lookups by user, by transport and across all bookings

Key Components:
- booking_service.py: Transaction manager for creating and cancelling bookings
- refund_policy.py: Refund percentage as a function of hours until departure
- query_service.py: Booking listings annotated with transport details
- exceptions.py: Booking error taxonomy rendered as JSON error bodies
- router.py: FastAPI endpoints
- schemas.py: Pydantic models for booking requests and responses
"""

from .router import router
from .booking_service import BookingService
from .query_service import BookingQueryService
from .refund_policy import refund_percentage, CANCELLATION_WINDOW_HOURS
from .schemas import (
    BookingCreateRequest, BookingCancelRequest, BookingCreated, BookingCancelled,
    BookingRecord, BookingWithTransport, BookingStatus
)

__all__ = [
    "router",
    "BookingService",
    "BookingQueryService",
    "refund_percentage",
    "CANCELLATION_WINDOW_HOURS",
    "BookingCreateRequest",
    "BookingCancelRequest",
    "BookingCreated",
    "BookingCancelled",
    "BookingRecord",
    "BookingWithTransport",
    "BookingStatus"
]
