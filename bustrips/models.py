import enum

from sqlalchemy import Column, String, Text, Boolean, Float, ForeignKey, Enum
from sqlalchemy.orm import relationship

from bustrips.database import Base

# ================================
# Bus classes
# ================================
class BusType(str, enum.Enum):
    """Bus size class; each member carries its seat capacity"""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    
    @property
    def capacity(self) -> int:
        return _BUS_CAPACITY[self]

_BUS_CAPACITY = {
    BusType.SMALL: 20,
    BusType.MEDIUM: 30,
    BusType.LARGE: 50,
}

# ================================
# Trips & Passengers
# ================================
class Trip(Base):
    __tablename__ = "trips"
    
    id = Column(String(36), primary_key=True, index=True)
    destination = Column(Text, nullable=False)
    departure_date = Column(Text, nullable=False, index=True)
    departure_time = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    bus_type = Column(
        Enum(
            BusType,
            name="bus_type",
            values_callable=lambda members: [m.value for m in members],
            create_constraint=True,
            validate_strings=True,
        ),
        nullable=False,
    )
    
    # Relationships
    passengers = relationship(
        "Passenger",
        back_populates="trip",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

class Passenger(Base):
    __tablename__ = "passengers"
    
    id = Column(String(36), primary_key=True, index=True)
    name = Column(Text, nullable=False)
    cpf = Column(Text, unique=True, nullable=False, index=True)
    seat_number = Column(Text, nullable=False)
    has_paid = Column(Boolean, nullable=False, default=False)
    trip_id = Column(
        String(36),
        ForeignKey("trips.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    
    # Relationships
    trip = relationship("Trip", back_populates="passengers")

# ================================
# Access
# ================================
class User(Base):
    __tablename__ = "users"
    
    id = Column(String(36), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
