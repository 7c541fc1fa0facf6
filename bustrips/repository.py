import uuid
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from bustrips.models import Trip, Passenger, BusType


def _commit(db: Session) -> None:
    """Commit, rolling the session back if the database refuses the write"""
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


class TripRepository:
    @staticmethod
    def create(
        db: Session,
        destination: str,
        departure_date: str,
        departure_time: str,
        price: float,
        bus_type: BusType,
    ) -> Trip:
        """Insert a trip with a freshly generated id"""
        db_trip = Trip(
            id=str(uuid.uuid4()),
            destination=destination,
            departure_date=departure_date,
            departure_time=departure_time,
            price=price,
            bus_type=bus_type,
        )
        
        db.add(db_trip)
        _commit(db)
        
        db.refresh(db_trip)
        return db_trip
    
    @staticmethod
    def get(db: Session, trip_id: str) -> Optional[Trip]:
        """Get trip by ID with its passengers loaded"""
        return db.query(Trip).options(
            selectinload(Trip.passengers)
        ).filter(Trip.id == trip_id).first()
    
    @staticmethod
    def list_with_passenger_counts(db: Session) -> List[Tuple[Trip, int]]:
        """All trips paired with their passenger count, latest departure first"""
        passenger_count = func.count(Passenger.id)
        return (
            db.query(Trip, passenger_count)
            .outerjoin(Passenger, Passenger.trip_id == Trip.id)
            .group_by(Trip.id)
            .order_by(Trip.departure_date.desc())
            .all()
        )
    
    @staticmethod
    def delete(db: Session, trip: Trip) -> None:
        """Delete a trip; the database cascades to its passengers"""
        db.delete(trip)
        _commit(db)


class PassengerRepository:
    @staticmethod
    def create(
        db: Session,
        trip_id: str,
        name: str,
        cpf: str,
        seat_number: str,
        has_paid: bool,
    ) -> Passenger:
        """Insert a passenger; unique cpf and trip FK are enforced by the database"""
        db_passenger = Passenger(
            id=str(uuid.uuid4()),
            name=name,
            cpf=cpf,
            seat_number=seat_number,
            has_paid=has_paid,
            trip_id=trip_id,
        )
        
        db.add(db_passenger)
        _commit(db)
        
        db.refresh(db_passenger)
        return db_passenger
    
    @staticmethod
    def get(db: Session, passenger_id: str) -> Optional[Passenger]:
        return db.query(Passenger).filter(Passenger.id == passenger_id).first()
    
    @staticmethod
    def list_for_trip(db: Session, trip_id: str) -> List[Passenger]:
        return db.query(Passenger).filter(Passenger.trip_id == trip_id).all()
    
    @staticmethod
    def set_paid(db: Session, passenger: Passenger, has_paid: bool) -> Passenger:
        passenger.has_paid = has_paid
        _commit(db)
        db.refresh(passenger)
        return passenger
    
    @staticmethod
    def delete(db: Session, passenger: Passenger) -> None:
        db.delete(passenger)
        _commit(db)
