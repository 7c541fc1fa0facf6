"""
Passenger rosters: registration, payment status and removal, always scoped to a trip.
"""

from .router import router
from .service import PassengerService, OwnershipStatus, OwnershipCheck, check_passenger_ownership

__all__ = [
    "router",
    "PassengerService",
    "OwnershipStatus",
    "OwnershipCheck",
    "check_passenger_ownership",
]
