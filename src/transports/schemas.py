from pydantic import Field, validator
from typing import List, Optional
from datetime import datetime, time
from src.schemas import APIModel, DecimalNumber, TransportType, WEEKDAYS

TIME_FORMATS = ("%H:%M", "%H:%M:%S")

def parse_time_of_day(value: str) -> time:
    """Parse an ``HH:MM`` (or ``HH:MM:SS``) time-of-day string"""
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time of day: {value!r} (expected HH:MM)")

def check_weekdays(days: Optional[List[str]]) -> Optional[List[str]]:
    if days is None:
        return days
    for day in days:
        if day not in WEEKDAYS:
            raise ValueError(f"Unknown weekday {day!r}; expected one of {', '.join(WEEKDAYS)}")
    return days

class ClassDefinition(APIModel):
    name: str = Field(..., min_length=1)
    price: DecimalNumber = Field(..., ge=0)
    default_seats: int = Field(10, ge=0)

class SeatDefinition(APIModel):
    seat_number: str = Field(..., min_length=1)
    class_type: str
    is_booked: bool = False

class TransportBase(APIModel):
    type: TransportType
    name: str = Field(..., min_length=1)
    source: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    departure_time: str
    arrival_time: str
    distance_in_km: DecimalNumber = Field(..., gt=0)
    available_days: List[str] = Field(..., min_length=1)
    provider_id: Optional[str] = None

    @validator("departure_time", "arrival_time")
    def validate_time_of_day(cls, v):
        parse_time_of_day(v)
        return v.strip()

    @validator("available_days")
    def validate_weekdays(cls, v):
        return check_weekdays(v)

class TransportCreate(TransportBase):
    classes: List[ClassDefinition] = Field(..., min_length=1)
    seats: Optional[List[SeatDefinition]] = None

    @validator("classes")
    def validate_unique_class_names(cls, v):
        names = [c.name for c in v]
        if len(names) != len(set(names)):
            raise ValueError("Class names must be unique")
        return v

class TransportUpdate(APIModel):
    """Partial update; a field left out is unchanged, only ``provider_id`` may be cleared with null"""
    type: Optional[TransportType] = None
    name: Optional[str] = Field(None, min_length=1)
    source: Optional[str] = Field(None, min_length=1)
    destination: Optional[str] = Field(None, min_length=1)
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None
    distance_in_km: Optional[DecimalNumber] = Field(None, gt=0)
    available_days: Optional[List[str]] = Field(None, min_length=1)
    classes: Optional[List[ClassDefinition]] = Field(None, min_length=1)
    provider_id: Optional[str] = None

    @validator(
        "type", "name", "source", "destination", "departure_time", "arrival_time",
        "distance_in_km", "available_days", "classes"
    )
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @validator("departure_time", "arrival_time")
    def validate_time_of_day(cls, v):
        parse_time_of_day(v)
        return v.strip()

    @validator("available_days")
    def validate_weekdays(cls, v):
        return check_weekdays(v)

class TransportSummary(APIModel):
    """Denormalized transport fields shown alongside bookings"""
    type: str
    name: str
    source: str
    destination: str
    departure_time: str
    arrival_time: str

class Transport(TransportBase):
    id: str
    type: str
    classes: List[ClassDefinition] = []
    seats: List[SeatDefinition] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
