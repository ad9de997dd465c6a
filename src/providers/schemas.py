from pydantic import Field, validator
from typing import Optional
from datetime import datetime
from src.schemas import APIModel, TransportType

class ServiceProviderBase(APIModel):
    name: str = Field(..., min_length=1)
    type: TransportType
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None

class ServiceProviderCreate(ServiceProviderBase):
    pass

class ServiceProviderUpdate(APIModel):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[TransportType] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None

    @validator("name", "type")
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

class ServiceProvider(ServiceProviderBase):
    id: str
    type: str
    created_at: Optional[datetime] = None

class ServiceProviderResponse(APIModel):
    message: str
    provider: ServiceProvider
