"""
Transport Inventory Module

Transports (airline, train and bus services) with their schedule, fare
classes and seat map. Seat maps are derived from the class definitions when
a transport is created; afterwards seats are only flipped between booked and
available by the booking module.
"""

from .router import router
from .service import TransportService, build_seat_map
from .schemas import (
    Transport, TransportCreate, TransportUpdate, TransportSummary,
    ClassDefinition, SeatDefinition
)

__all__ = [
    "router",
    "TransportService",
    "build_seat_map",
    "Transport",
    "TransportCreate",
    "TransportUpdate",
    "TransportSummary",
    "ClassDefinition",
    "SeatDefinition"
]
