from pydantic import BaseModel, Field, StrictBool, validator
from typing import Any

from bustrips.schemas import CamelModel

class PassengerBase(CamelModel):
    name: str
    cpf: str
    seat_number: str
    has_paid: bool = False
    
    @validator("seat_number", pre=True)
    def stringify_seat_number(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

class PassengerCreate(PassengerBase):
    # required, and "yes" / 1 are not coerced
    has_paid: StrictBool

class Passenger(PassengerBase):
    id: str
    trip_id: str

class PaymentUpdate(BaseModel):
    # Left untyped so a non-boolean reaches the service and is rejected there with a 400
    has_paid: Any = Field(None, alias="hasPaid")
    
    class Config:
        populate_by_name = True
