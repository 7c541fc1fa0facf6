"""
Trip management: creation, lookup and seat-availability listing.

Key Components:
- service.py: TripService and the seat occupancy calculation
- router.py: FastAPI endpoints under /trips
- schemas.py: Pydantic models for trips and seat info
"""

from .router import router
from .service import TripService, seats_info_for

__all__ = [
    "router",
    "TripService",
    "seats_info_for",
]
