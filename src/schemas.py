from decimal import Decimal
from enum import Enum
from typing import Annotated
from pydantic import BaseModel, PlainSerializer
from pydantic.alias_generators import to_camel

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# Prices and distances are exact in Python and plain numbers on the wire
DecimalNumber = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

class TransportType(str, Enum):
    """Kinds of transport a provider can operate"""
    AIRLINE = "airline"
    TRAIN = "train"
    BUS = "bus"

class APIModel(BaseModel):
    """Base for request/response bodies: camelCase on the wire, snake_case in Python"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
