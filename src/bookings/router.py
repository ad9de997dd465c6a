from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Callable, List
from datetime import datetime

from src.database import get_db
from src.bookings.schemas import (
    BookingCreateRequest, BookingCancelRequest, BookingCreated, BookingCancelled,
    BookingWithTransport, BookingPage, TransportBookingPage
)
from src.bookings.booking_service import BookingService
from src.bookings.query_service import BookingQueryService, DEFAULT_PAGE, DEFAULT_LIMIT
from src.bookings.dependencies import get_clock

router = APIRouter()

# Booking errors are raised as BookingError and rendered by the handler in src.main

@router.post("/bookings", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
def create_booking(
    request: BookingCreateRequest,
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    """Book seats on a transport"""
    return BookingService(db, clock=clock).create_booking(request)

@router.post("/bookings/{booking_id}/cancel", response_model=BookingCancelled)
def cancel_booking(
    booking_id: str,
    request: BookingCancelRequest,
    db: Session = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    """Cancel a booking and compute its refund"""
    return BookingService(db, clock=clock).cancel_booking(booking_id, request)

@router.get("/users/{user_id}/bookings", response_model=List[BookingWithTransport])
def get_user_bookings(user_id: str, db: Session = Depends(get_db)):
    """Get all bookings for a user, newest first"""
    return BookingQueryService(db).get_user_bookings(user_id)

@router.get("/all", response_model=BookingPage)
def get_all_bookings(
    page: int = Query(DEFAULT_PAGE, ge=1, description="Page number"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=100, description="Bookings per page"),
    db: Session = Depends(get_db)
):
    """Get all bookings, paginated"""
    return BookingQueryService(db).get_all_bookings(page=page, limit=limit)

@router.get("/{transport_id}", response_model=TransportBookingPage)
def get_transport_bookings(
    transport_id: str,
    page: int = Query(DEFAULT_PAGE, ge=1, description="Page number"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=100, description="Bookings per page"),
    db: Session = Depends(get_db)
):
    """Get bookings for one transport, paginated"""
    return BookingQueryService(db).get_transport_bookings(transport_id, page=page, limit=limit)
