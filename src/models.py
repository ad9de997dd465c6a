import uuid

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey, Numeric, JSON, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from src.database import Base


def generate_id() -> str:
    return str(uuid.uuid4())

# ================================
# Users
# ================================
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    phone = Column(String(50), unique=True, nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

# ================================
# Service Providers
# ================================
class ServiceProvider(Base):
    __tablename__ = "service_providers"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, index=True)  # airline, train, bus
    contact_email = Column(String(255))
    contact_phone = Column(String(50))
    address = Column(Text)
    website = Column(String(255))
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    transports = relationship("Transport", back_populates="provider")

# ================================
# Transport Inventory
# ================================
class Transport(Base):
    __tablename__ = "transports"

    id = Column(String(36), primary_key=True, default=generate_id)
    type = Column(String(20), nullable=False, index=True)  # airline, train, bus
    name = Column(String(255), nullable=False)
    source = Column(String(255), nullable=False, index=True)
    destination = Column(String(255), nullable=False, index=True)
    departure_time = Column(String(8), nullable=False)  # HH:MM, time of day
    arrival_time = Column(String(8), nullable=False)
    distance_in_km = Column(Numeric(10, 2), nullable=False)
    available_days = Column(JSON, nullable=False, default=list)
    provider_id = Column(String(36), ForeignKey("service_providers.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    provider = relationship("ServiceProvider", back_populates="transports")
    classes = relationship(
        "TransportClass",
        back_populates="transport",
        order_by="TransportClass.position",
        cascade="all, delete-orphan",
    )
    seats = relationship(
        "Seat",
        back_populates="transport",
        order_by="Seat.position",
        cascade="all, delete-orphan",
    )

class TransportClass(Base):
    __tablename__ = "transport_classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    transport_id = Column(String(36), ForeignKey("transports.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    default_seats = Column(Integer, nullable=False, default=10)

    # Relationships
    transport = relationship("Transport", back_populates="classes")

class Seat(Base):
    __tablename__ = "seats"
    __table_args__ = (
        UniqueConstraint("transport_id", "seat_number", name="uq_seat_transport_number"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    transport_id = Column(String(36), ForeignKey("transports.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    seat_number = Column(String(20), nullable=False)
    class_type = Column(String(100), nullable=False)
    is_booked = Column(Boolean, nullable=False, default=False)

    # Relationships
    transport = relationship("Transport", back_populates="seats")

# ================================
# Bookings
# ================================
class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_transport_status", "transport_id", "status"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    # Weak reference: the transport may be deleted while bookings remain
    transport_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    total_price = Column(Numeric(10, 2), nullable=False)
    booking_date = Column(DateTime, nullable=False, index=True)
    departure_date_time = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="confirmed", index=True)  # confirmed, cancelled
    cancelled_at = Column(DateTime, nullable=True)
    refund_amount = Column(Numeric(10, 2), nullable=True)
    refund_percentage = Column(Integer, nullable=True)

    # Relationships
    seats = relationship(
        "BookingSeat",
        back_populates="booking",
        order_by="BookingSeat.position",
        cascade="all, delete-orphan",
    )

class BookingSeat(Base):
    """Seat, class and price captured when the booking was made."""
    __tablename__ = "booking_seats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(String(36), ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    seat_number = Column(String(20), nullable=False)
    class_type = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    # Relationships
    booking = relationship("Booking", back_populates="seats")
