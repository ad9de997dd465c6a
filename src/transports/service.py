import logging
from sqlalchemy.orm import Session, selectinload
from typing import List, Optional
from src.models import Transport, TransportClass, Seat, ServiceProvider
from src.transports.schemas import ClassDefinition, SeatDefinition, TransportCreate, TransportUpdate

logger = logging.getLogger(__name__)

def build_seat_map(classes: List[ClassDefinition]) -> List[SeatDefinition]:
    """
    Derive the initial seat map from the class definitions.

    The class at position ``i`` gets the letter ``chr(65 + i)`` and seats
    ``<letter>1`` .. ``<letter>N`` where N is its ``default_seats``. Runs once,
    when a transport is created without an explicit seat list.
    """
    seats = []
    for index, seat_class in enumerate(classes):
        prefix = chr(65 + index)
        for number in range(1, seat_class.default_seats + 1):
            seats.append(SeatDefinition(
                seat_number=f"{prefix}{number}",
                class_type=seat_class.name,
                is_booked=False
            ))
    return seats

def validate_seat_map(classes: List[ClassDefinition], seats: List[SeatDefinition]) -> None:
    """Every seat must reference a defined class and seat numbers must be unique"""
    class_names = {c.name for c in classes}

    unknown = [s.seat_number for s in seats if s.class_type not in class_names]
    if unknown:
        raise ValueError(f"Seats reference undefined classes: {', '.join(unknown)}")

    seen = set()
    duplicates = []
    for seat in seats:
        if seat.seat_number in seen:
            duplicates.append(seat.seat_number)
        seen.add(seat.seat_number)
    if duplicates:
        raise ValueError(f"Duplicate seat numbers: {', '.join(duplicates)}")

class TransportService:
    @staticmethod
    def get_transport_by_id(db: Session, transport_id: str) -> Optional[Transport]:
        """Get transport by ID with classes and seats"""
        return db.query(Transport).options(
            selectinload(Transport.classes),
            selectinload(Transport.seats)
        ).filter(Transport.id == transport_id).first()

    @staticmethod
    def get_transports(
        db: Session,
        type: Optional[str] = None,
        source: Optional[str] = None,
        destination: Optional[str] = None
    ) -> List[Transport]:
        """Get transports with optional exact-match filters"""
        query = db.query(Transport).options(
            selectinload(Transport.classes),
            selectinload(Transport.seats)
        )

        if type:
            query = query.filter(Transport.type == type)
        if source:
            query = query.filter(Transport.source == source)
        if destination:
            query = query.filter(Transport.destination == destination)

        return query.order_by(Transport.created_at, Transport.name).all()

    @staticmethod
    def create_transport(db: Session, data: TransportCreate) -> Transport:
        """Create a transport; the seat map is derived from the classes unless supplied"""
        if data.provider_id and not db.get(ServiceProvider, data.provider_id):
            raise ValueError("Service provider not found")

        seats = data.seats if data.seats else build_seat_map(data.classes)
        validate_seat_map(data.classes, seats)

        transport = Transport(
            type=data.type.value,
            name=data.name,
            source=data.source,
            destination=data.destination,
            departure_time=data.departure_time,
            arrival_time=data.arrival_time,
            distance_in_km=data.distance_in_km,
            available_days=list(data.available_days),
            provider_id=data.provider_id,
            classes=[
                TransportClass(
                    position=position,
                    name=c.name,
                    price=c.price,
                    default_seats=c.default_seats
                ) for position, c in enumerate(data.classes)
            ],
            seats=[
                Seat(
                    position=position,
                    seat_number=s.seat_number,
                    class_type=s.class_type,
                    is_booked=s.is_booked
                ) for position, s in enumerate(seats)
            ]
        )

        db.add(transport)
        db.commit()
        db.refresh(transport)

        logger.info("Created transport %s with %d seats", transport.id, len(seats))
        return transport

    @staticmethod
    def update_transport(db: Session, transport_id: str, update: TransportUpdate) -> Optional[Transport]:
        """Update transport details; the seat map is never regenerated"""
        transport = TransportService.get_transport_by_id(db, transport_id)
        if not transport:
            return None

        update_data = update.dict(exclude_unset=True)
        classes = update_data.pop("classes", None)

        if classes is not None:
            definitions = update.classes
            if not definitions:
                raise ValueError("At least one class is required")
            names = {c.name for c in definitions}
            if len(names) != len(definitions):
                raise ValueError("Class names must be unique")
            orphaned = [s.seat_number for s in transport.seats if s.class_type not in names]
            if orphaned:
                raise ValueError(f"Seats would reference undefined classes: {', '.join(orphaned)}")

        if update_data.get("provider_id") and not db.get(ServiceProvider, update_data["provider_id"]):
            raise ValueError("Service provider not found")

        if "type" in update_data and update_data["type"] is not None:
            update_data["type"] = update.type.value

        for field, value in update_data.items():
            if value is None and field != "provider_id":
                continue
            setattr(transport, field, value)

        if classes is not None:
            transport.classes = [
                TransportClass(
                    position=position,
                    name=c.name,
                    price=c.price,
                    default_seats=c.default_seats
                ) for position, c in enumerate(definitions)
            ]

        db.commit()
        db.refresh(transport)

        logger.info("Updated transport %s", transport.id)
        return transport

    @staticmethod
    def delete_transport(db: Session, transport_id: str) -> bool:
        """Delete a transport with its classes and seats; bookings are kept"""
        transport = db.get(Transport, transport_id)
        if not transport:
            return False

        db.delete(transport)
        db.commit()

        logger.info("Deleted transport %s", transport_id)
        return True
