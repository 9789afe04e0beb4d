from datetime import date, time
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TrainRecord(BaseModel):
    """A train row as read from the store."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    train_number: str = Field(..., min_length=1, max_length=32)
    train_name: str = Field(..., min_length=1, max_length=255)
    from_station: str = Field(..., min_length=1, max_length=128)
    to_station: str = Field(..., min_length=1, max_length=128)
    departure_time: time
    arrival_time: time
    available_seats: int = Field(..., ge=0)
    price_per_seat: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class TrainSummary(BaseModel):
    """Train columns joined onto a booking listing."""

    model_config = ConfigDict(from_attributes=True)

    train_number: str
    train_name: str
    from_station: str
    to_station: str
    departure_time: time
    arrival_time: time


class TrainSearchResponse(BaseModel):
    from_station: str = ""
    to_station: str = ""
    # carried for display and booking only, never used to filter
    journey_date: Optional[date] = None
    trains: List[TrainRecord]
