from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import List
import structlog

from bustrips.database import get_db
from bustrips.exceptions import PassengerNotFoundError
from bustrips.passengers.schemas import Passenger, PassengerCreate, PaymentUpdate
from bustrips.passengers.service import PassengerService

logger = structlog.get_logger(__name__)

router = APIRouter()

@router.post("/{trip_id}/passengers", response_model=Passenger, status_code=status.HTTP_201_CREATED)
def add_passenger(trip_id: str, request: PassengerCreate, db: Session = Depends(get_db)):
    """Add a passenger to a trip"""
    
    passenger_service = PassengerService(db)
    
    try:
        return passenger_service.add_passenger(trip_id, request)
    except Exception as e:
        logger.exception("request_failed", action="add_passenger", trip_id=trip_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to add passenger: {str(e)}"
        )

@router.get("/{trip_id}/passengers", response_model=List[Passenger])
def list_passengers(trip_id: str, db: Session = Depends(get_db)):
    """List the passengers of a trip"""
    
    passenger_service = PassengerService(db)
    
    try:
        return passenger_service.list_passengers(trip_id)
    except Exception as e:
        logger.exception("request_failed", action="list_passengers", trip_id=trip_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to list passengers: {str(e)}"
        )

@router.put("/{trip_id}/passengers/{passenger_id}/payment", response_model=Passenger)
def update_payment_status(
    trip_id: str,
    passenger_id: str,
    payment: PaymentUpdate,
    db: Session = Depends(get_db)
):
    """Mark a passenger as paid or unpaid"""
    
    passenger_service = PassengerService(db)
    
    try:
        return passenger_service.set_payment_status(trip_id, passenger_id, payment.has_paid)
    except PassengerNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.exception("request_failed", action="update_payment_status", passenger_id=passenger_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update payment status: {str(e)}"
        )

@router.delete("/{trip_id}/passengers/{passenger_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_passenger(trip_id: str, passenger_id: str, db: Session = Depends(get_db)):
    """Remove a passenger from a trip"""
    
    passenger_service = PassengerService(db)
    
    try:
        passenger_service.remove_passenger(trip_id, passenger_id)
    except PassengerNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.exception("request_failed", action="remove_passenger", passenger_id=passenger_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to remove passenger: {str(e)}"
        )
    
    return Response(status_code=status.HTTP_204_NO_CONTENT)
