from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from railbook.schemas.train import TrainSummary

# row letter A-F followed by 1-72
SEAT_NUMBER_PATTERN = r"^[A-F]([1-9]|[1-6][0-9]|7[0-2])$"


class BookingCreateRequest(BaseModel):
    train_id: int
    journey_date: date
    # raw form values; checked by the passenger validator so the caller
    # gets the first violated rule rather than every field error
    passenger: Dict[str, Any] = Field(default_factory=dict)


class BookingRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    train_id: int
    passenger_name: str = Field(..., min_length=2, max_length=100)
    passenger_age: int = Field(..., ge=1, le=120)
    passenger_email: str = Field(..., max_length=255)
    seat_number: str = Field(..., pattern=SEAT_NUMBER_PATTERN)
    journey_date: date
    total_amount: Decimal = Field(..., ge=0)
    booking_reference: str = Field(..., min_length=1, max_length=64)
    booking_status: str
    created_at: datetime


class BookingWithTrain(BookingRecord):
    train: TrainSummary
