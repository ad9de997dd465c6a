from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from src.database import get_db
from src.schemas import TransportType
from src.transports.schemas import Transport, TransportCreate, TransportUpdate
from src.transports.service import TransportService

router = APIRouter()

@router.post("/add", response_model=Transport, status_code=status.HTTP_201_CREATED)
def add_transport(transport: TransportCreate, db: Session = Depends(get_db)):
    """Add a new transport; seats are generated from the classes when not supplied"""
    try:
        return TransportService.create_transport(db, transport)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

@router.get("/all", response_model=List[Transport])
def get_transports(
    type: Optional[TransportType] = Query(None, description="Filter by transport type"),
    source: Optional[str] = Query(None, description="Filter by source"),
    destination: Optional[str] = Query(None, description="Filter by destination"),
    db: Session = Depends(get_db)
):
    """Get all transports with optional filters"""
    return TransportService.get_transports(
        db,
        type=type.value if type else None,
        source=source,
        destination=destination
    )

@router.get("/{transport_id}", response_model=Transport)
def get_transport(transport_id: str, db: Session = Depends(get_db)):
    """Get transport details by ID"""
    transport = TransportService.get_transport_by_id(db, transport_id)
    if not transport:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Transport not found"
        )
    return transport

@router.put("/{transport_id}", response_model=Transport)
def update_transport(transport_id: str, update: TransportUpdate, db: Session = Depends(get_db)):
    """Update transport details"""
    try:
        transport = TransportService.update_transport(db, transport_id, update)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    if not transport:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Transport not found"
        )
    return transport

@router.delete("/{transport_id}")
def delete_transport(transport_id: str, db: Session = Depends(get_db)):
    """Delete a transport"""
    if not TransportService.delete_transport(db, transport_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Transport not found"
        )
    return {"message": "Transport deleted successfully"}
