from pydantic import validator
from typing import List, Optional
from datetime import datetime, date
from enum import Enum
from src.schemas import APIModel, DecimalNumber
from src.transports.schemas import TransportSummary

class BookingStatus(str, Enum):
    """Booking status enumeration; cancelled is terminal"""
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

# Requests
class BookingCreateRequest(APIModel):
    """Request to book seats on a transport.

    Required fields are checked by the booking service rather than by the
    schema so that missing values surface as a booking validation error.
    """
    transport_id: Optional[str] = None
    seats: Optional[List[str]] = None
    user_id: Optional[str] = None
    booking_date: Optional[date] = None
    class_type: Optional[str] = None

    @validator("seats", pre=True)
    def wrap_single_seat(cls, v):
        if isinstance(v, str):
            return [v]
        return v

class BookingCancelRequest(APIModel):
    user_id: Optional[str] = None

# Responses
class SeatPrice(APIModel):
    """Seat snapshot taken at booking time"""
    seat_number: str
    class_type: str
    price: DecimalNumber

class BookingCreated(APIModel):
    message: str = "Booking created successfully"
    booking_id: str
    total_price: DecimalNumber
    seats: List[SeatPrice]
    booking_date: datetime
    departure_date_time: datetime
    transport_details: TransportSummary

class BookingCancelled(APIModel):
    message: str = "Booking cancelled successfully"
    booking_id: str
    refund_amount: DecimalNumber
    refund_percentage: int
    cancelled_at: datetime
    seats: List[str]

class BookingRecord(APIModel):
    id: str
    transport_id: str
    user_id: str
    seats: List[SeatPrice]
    total_price: DecimalNumber
    booking_date: datetime
    departure_date_time: datetime
    status: BookingStatus
    cancelled_at: Optional[datetime] = None
    refund_amount: Optional[DecimalNumber] = None
    refund_percentage: Optional[int] = None

class BookingWithTransport(BookingRecord):
    transport_details: Optional[TransportSummary] = None

class Pagination(APIModel):
    current_page: int
    total_pages: int
    total_bookings: int
    has_more: bool

class BookingPage(APIModel):
    bookings: List[BookingWithTransport]
    pagination: Pagination

class TransportBookingPage(APIModel):
    bookings: List[BookingRecord]
    transport_details: TransportSummary
    pagination: Pagination
