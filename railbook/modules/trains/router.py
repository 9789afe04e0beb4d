from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from railbook.auth.deps import get_public_store
from railbook.db.store import DataStore
from railbook.errors import BookingError
from railbook.schemas.train import TrainRecord, TrainSearchResponse
from railbook.services import catalog

router = APIRouter(tags=["trains"])


@router.get("", response_model=TrainSearchResponse)
async def search_trains(
    from_station: Optional[str] = Query(None, alias="from"),
    to_station: Optional[str] = Query(None, alias="to"),
    journey_date: Optional[date] = Query(None, alias="date"),
    store: DataStore = Depends(get_public_store),
):
    """Trains between two stations. The date is echoed back for the booking step."""
    try:
        trains = await catalog.search_trains(store, from_station, to_station)
    except BookingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)
    return TrainSearchResponse(
        from_station=from_station or "",
        to_station=to_station or "",
        journey_date=journey_date,
        trains=trains,
    )


@router.get("/{train_id}", response_model=TrainRecord)
async def train_details(train_id: int, store: DataStore = Depends(get_public_store)):
    try:
        return await catalog.get_train(store, train_id)
    except BookingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)
