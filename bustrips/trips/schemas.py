from pydantic import Field
from typing import List

from bustrips.models import BusType
from bustrips.passengers.schemas import Passenger
from bustrips.schemas import CamelModel

class TripBase(CamelModel):
    destination: str
    departure_date: str
    departure_time: str
    price: float = Field(..., ge=0)
    bus_type: BusType

class TripCreate(TripBase):
    pass

class Trip(TripBase):
    id: str

class TripDetail(Trip):
    passengers: List[Passenger] = []

class SeatsInfo(CamelModel):
    total_seats: int
    occupied_seats: int
    available_seats: int

class TripSummary(Trip):
    seats_info: SeatsInfo
