import logging
import math
from typing import Dict, Iterable, List
from sqlalchemy.orm import Session, selectinload
from src.models import Booking, Transport
from src.transports.schemas import TransportSummary
from src.bookings.schemas import (
    BookingRecord, BookingWithTransport, BookingPage, TransportBookingPage, Pagination
)
from src.bookings.exceptions import ValidationError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

class BookingQueryService:
    """Read-only booking lookups annotated with transport details"""

    def __init__(self, db: Session):
        self.db = db

    def get_user_bookings(self, user_id: str) -> List[BookingWithTransport]:
        """All bookings of a user, newest first"""
        if not user_id:
            raise ValidationError("User ID is required")

        bookings = (
            self._bookings_query()
            .filter(Booking.user_id == user_id)
            .all()
        )
        return self._annotate(bookings)

    def get_all_bookings(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> BookingPage:
        self._check_page(page, limit)

        total = self.db.query(Booking).count()
        bookings = (
            self._bookings_query()
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

        return BookingPage(
            bookings=self._annotate(bookings),
            pagination=self._pagination(page, limit, total)
        )

    def get_transport_bookings(
        self,
        transport_id: str,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT
    ) -> TransportBookingPage:
        if not transport_id:
            raise ValidationError("Transport ID is required")
        self._check_page(page, limit)

        transport = self.db.query(Transport).filter(Transport.id == transport_id).first()
        if not transport:
            raise NotFoundError("Transport not found")

        total = self.db.query(Booking).filter(Booking.transport_id == transport_id).count()
        bookings = (
            self._bookings_query()
            .filter(Booking.transport_id == transport_id)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

        return TransportBookingPage(
            bookings=[BookingRecord.model_validate(b) for b in bookings],
            transport_details=TransportSummary.model_validate(transport),
            pagination=self._pagination(page, limit, total)
        )

    def _bookings_query(self):
        return self.db.query(Booking).options(
            selectinload(Booking.seats)
        ).order_by(Booking.booking_date.desc(), Booking.id)

    def _annotate(self, bookings: List[Booking]) -> List[BookingWithTransport]:
        """Attach transport details; a deleted transport yields None"""
        summaries = self._transport_summaries(b.transport_id for b in bookings)
        annotated = []
        for booking in bookings:
            record = BookingWithTransport.model_validate(booking)
            record.transport_details = summaries.get(booking.transport_id)
            annotated.append(record)
        return annotated

    def _transport_summaries(self, transport_ids: Iterable[str]) -> Dict[str, TransportSummary]:
        ids = set(transport_ids)
        if not ids:
            return {}
        transports = self.db.query(Transport).filter(Transport.id.in_(ids)).all()
        return {t.id: TransportSummary.model_validate(t) for t in transports}

    @staticmethod
    def _check_page(page: int, limit: int) -> None:
        if page < 1 or limit < 1:
            raise ValidationError("Page and limit must be positive integers")

    @staticmethod
    def _pagination(page: int, limit: int, total: int) -> Pagination:
        return Pagination(
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_bookings=total,
            has_more=page * limit < total
        )
