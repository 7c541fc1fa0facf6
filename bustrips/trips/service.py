from typing import List

import structlog
from sqlalchemy.orm import Session

from bustrips.exceptions import TripNotFoundError
from bustrips.models import Trip, BusType
from bustrips.repository import TripRepository
from bustrips.trips.schemas import TripCreate, TripSummary, SeatsInfo

logger = structlog.get_logger(__name__)

def seats_info_for(bus_type: BusType, occupied_seats: int) -> SeatsInfo:
    """Seat occupancy for a bus class; available seats go negative when overbooked"""
    total_seats = bus_type.capacity
    return SeatsInfo(
        total_seats=total_seats,
        occupied_seats=occupied_seats,
        available_seats=total_seats - occupied_seats,
    )

class TripService:
    """Creates, lists and fetches trips"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def create_trip(self, request: TripCreate) -> Trip:
        trip = TripRepository.create(
            self.db,
            destination=request.destination,
            departure_date=request.departure_date,
            departure_time=request.departure_time,
            price=request.price,
            bus_type=request.bus_type,
        )
        logger.info("trip_created", trip_id=trip.id, destination=trip.destination, bus_type=trip.bus_type.value)
        return trip
    
    def list_trips(self) -> List[TripSummary]:
        """All trips with seat occupancy, latest departure date first"""
        summaries = []
        for trip, passenger_count in TripRepository.list_with_passenger_counts(self.db):
            summaries.append(TripSummary(
                id=trip.id,
                destination=trip.destination,
                departure_date=trip.departure_date,
                departure_time=trip.departure_time,
                price=trip.price,
                bus_type=trip.bus_type,
                seats_info=seats_info_for(trip.bus_type, passenger_count),
            ))
        return summaries
    
    def get_trip(self, trip_id: str) -> Trip:
        trip = TripRepository.get(self.db, trip_id)
        if trip is None:
            raise TripNotFoundError(trip_id)
        return trip
