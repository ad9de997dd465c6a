#!/usr/bin/env python3

from decimal import Decimal
from sqlalchemy.orm import Session

from src.database import SessionLocal, init_db
from src.models import Booking, BookingSeat, Seat, TransportClass, Transport, ServiceProvider
from src.providers.schemas import ServiceProviderCreate
from src.providers.service import ServiceProviderService
from src.transports.schemas import TransportCreate, ClassDefinition
from src.transports.service import TransportService

ALL_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
WEEKDAYS_ONLY = ALL_DAYS[:5]

PROVIDERS = [
    {"name": "SkyWays", "type": "airline", "contact_email": "ops@skyways.example", "website": "https://skyways.example"},
    {"name": "National Rail", "type": "train", "contact_email": "info@rail.example", "contact_phone": "+1-555-0100"},
    {"name": "Intercity Coaches", "type": "bus", "contact_email": "hello@coaches.example"},
]

TRANSPORTS = [
    {
        "provider": "SkyWays", "type": "airline", "name": "SW 101",
        "source": "Delhi", "destination": "Mumbai",
        "departure_time": "06:30", "arrival_time": "08:45", "distance_in_km": Decimal("1150"),
        "available_days": ALL_DAYS,
        "classes": [("Business", Decimal("9500"), 8), ("Economy", Decimal("4200"), 30)],
    },
    {
        "provider": "National Rail", "type": "train", "name": "Coastal Express",
        "source": "Chennai", "destination": "Bengaluru",
        "departure_time": "07:15", "arrival_time": "12:10", "distance_in_km": Decimal("350"),
        "available_days": WEEKDAYS_ONLY,
        "classes": [("First", Decimal("1800"), 10), ("Sleeper", Decimal("650"), 20), ("General", Decimal("250"), 40)],
    },
    {
        "provider": "Intercity Coaches", "type": "bus", "name": "Night Rider",
        "source": "Pune", "destination": "Goa",
        "departure_time": "21:00", "arrival_time": "06:30", "distance_in_km": Decimal("450"),
        "available_days": ["Friday", "Saturday", "Sunday"],
        "classes": [("Sleeper", Decimal("1200"), 20), ("Seater", Decimal("800"), 20)],
    },
]

def clear_data(db: Session):
    """Remove existing data in reverse dependency order"""
    db.query(BookingSeat).delete()
    db.query(Booking).delete()
    db.query(Seat).delete()
    db.query(TransportClass).delete()
    db.query(Transport).delete()
    db.query(ServiceProvider).delete()
    db.commit()

def create_seed_data(db: Session) -> dict:
    print("🚀 Creating seed data for the Transport Booking System...")

    print("Clearing existing data...")
    clear_data(db)

    print("Creating service providers...")
    providers = {}
    for provider_data in PROVIDERS:
        provider = ServiceProviderService.create_provider(db, ServiceProviderCreate(**provider_data))
        providers[provider.name] = provider

    print("Creating transports...")
    transports = []
    for transport_data in TRANSPORTS:
        data = dict(transport_data)
        provider = providers[data.pop("provider")]
        classes = [
            ClassDefinition(name=name, price=price, default_seats=seats)
            for name, price, seats in data.pop("classes")
        ]
        transport = TransportService.create_transport(
            db, TransportCreate(provider_id=provider.id, classes=classes, **data)
        )
        transports.append(transport)
        print(f"  ✓ {transport.name}: {transport.source} → {transport.destination}, {len(transport.seats)} seats")

    print("✅ Seed data created successfully")
    return {"providers": len(providers), "transports": len(transports)}

if __name__ == "__main__":
    init_db()
    db = SessionLocal()
    try:
        create_seed_data(db)
    finally:
        db.close()
