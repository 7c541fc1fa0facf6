from enum import Enum
from typing import Any, List, NamedTuple, Optional

import structlog
from sqlalchemy.orm import Session

from bustrips.exceptions import (
    InvalidPaymentStatusError, PassengerNotFoundError, PassengerTripMismatchError
)
from bustrips.models import Passenger
from bustrips.passengers.schemas import PassengerCreate
from bustrips.repository import PassengerRepository

logger = structlog.get_logger(__name__)

class OwnershipStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    MISMATCH = "mismatch"

class OwnershipCheck(NamedTuple):
    status: OwnershipStatus
    passenger: Optional[Passenger]

def check_passenger_ownership(db: Session, trip_id: str, passenger_id: str) -> OwnershipCheck:
    """Look up a passenger and tell whether it belongs to ``trip_id``"""
    passenger = PassengerRepository.get(db, passenger_id)
    if passenger is None:
        return OwnershipCheck(OwnershipStatus.NOT_FOUND, None)
    if passenger.trip_id != trip_id:
        return OwnershipCheck(OwnershipStatus.MISMATCH, passenger)
    return OwnershipCheck(OwnershipStatus.OK, passenger)

class PassengerService:
    """Manages the passenger roster of a trip"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def add_passenger(self, trip_id: str, request: PassengerCreate) -> Passenger:
        """Register a passenger; duplicate cpf or unknown trip fail in the database"""
        passenger = PassengerRepository.create(
            self.db,
            trip_id=trip_id,
            name=request.name,
            cpf=request.cpf,
            seat_number=request.seat_number,
            has_paid=request.has_paid,
        )
        logger.info("passenger_added", trip_id=trip_id, passenger_id=passenger.id)
        return passenger
    
    def list_passengers(self, trip_id: str) -> List[Passenger]:
        return PassengerRepository.list_for_trip(self.db, trip_id)
    
    def set_payment_status(self, trip_id: str, passenger_id: str, has_paid: Any) -> Passenger:
        """Mark a passenger as paid or unpaid"""
        # bool only; "yes", 1 and null are all rejected
        if not isinstance(has_paid, bool):
            raise InvalidPaymentStatusError(has_paid)
        
        passenger = self._owned_passenger(trip_id, passenger_id)
        passenger = PassengerRepository.set_paid(self.db, passenger, has_paid)
        logger.info("payment_status_updated", trip_id=trip_id, passenger_id=passenger_id, has_paid=has_paid)
        return passenger
    
    def remove_passenger(self, trip_id: str, passenger_id: str) -> None:
        passenger = self._owned_passenger(trip_id, passenger_id)
        PassengerRepository.delete(self.db, passenger)
        logger.info("passenger_removed", trip_id=trip_id, passenger_id=passenger_id)
    
    def _owned_passenger(self, trip_id: str, passenger_id: str) -> Passenger:
        check = check_passenger_ownership(self.db, trip_id, passenger_id)
        if check.status == OwnershipStatus.NOT_FOUND:
            raise PassengerNotFoundError(passenger_id)
        if check.status == OwnershipStatus.MISMATCH:
            raise PassengerTripMismatchError(passenger_id, trip_id)
        return check.passenger
