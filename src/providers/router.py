from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from src.database import get_db
from src.providers.schemas import (
    ServiceProvider, ServiceProviderCreate, ServiceProviderUpdate, ServiceProviderResponse
)
from src.providers.service import ServiceProviderService

router = APIRouter()

@router.post("/add", response_model=ServiceProviderResponse, status_code=status.HTTP_201_CREATED)
def add_service_provider(provider: ServiceProviderCreate, db: Session = Depends(get_db)):
    """Add a new service provider"""
    db_provider = ServiceProviderService.create_provider(db, provider)
    return ServiceProviderResponse(message="Service provider added successfully", provider=db_provider)

@router.get("/", response_model=List[ServiceProvider])
def get_all_service_providers(db: Session = Depends(get_db)):
    """Get all service providers"""
    return ServiceProviderService.get_providers(db)

@router.get("/{provider_id}", response_model=ServiceProvider)
def get_service_provider(provider_id: str, db: Session = Depends(get_db)):
    """Get a service provider by ID"""
    provider = ServiceProviderService.get_provider_by_id(db, provider_id)
    if not provider:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service provider not found"
        )
    return provider

@router.put("/update/{provider_id}", response_model=ServiceProviderResponse)
def update_service_provider(provider_id: str, update: ServiceProviderUpdate, db: Session = Depends(get_db)):
    """Update a service provider"""
    provider = ServiceProviderService.update_provider(db, provider_id, update)
    if not provider:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service provider not found"
        )
    return ServiceProviderResponse(message="Service provider updated successfully", provider=provider)

@router.delete("/delete/{provider_id}")
def delete_service_provider(provider_id: str, db: Session = Depends(get_db)):
    """Delete a service provider"""
    if not ServiceProviderService.delete_provider(db, provider_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Service provider not found"
        )
    return {"message": "Service provider deleted successfully"}
