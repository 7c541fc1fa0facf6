from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import structlog

from bustrips.database import get_db
from bustrips.exceptions import TripNotFoundError
from bustrips.trips.schemas import Trip, TripCreate, TripDetail, TripSummary
from bustrips.trips.service import TripService

logger = structlog.get_logger(__name__)

router = APIRouter()

@router.post("", response_model=Trip, status_code=status.HTTP_201_CREATED)
def create_trip(request: TripCreate, db: Session = Depends(get_db)):
    """Create a new trip"""
    
    trip_service = TripService(db)
    
    try:
        return trip_service.create_trip(request)
    except Exception as e:
        logger.exception("request_failed", action="create_trip")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create trip: {str(e)}"
        )

@router.get("", response_model=List[TripSummary])
def list_trips(db: Session = Depends(get_db)):
    """List all trips with seat availability"""
    
    trip_service = TripService(db)
    
    try:
        return trip_service.list_trips()
    except Exception as e:
        logger.exception("request_failed", action="list_trips")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to list trips: {str(e)}"
        )

@router.get("/{trip_id}", response_model=TripDetail)
def get_trip(trip_id: str, db: Session = Depends(get_db)):
    """Get a trip with its passengers"""
    
    trip_service = TripService(db)
    
    try:
        return trip_service.get_trip(trip_id)
    except TripNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
