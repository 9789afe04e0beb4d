from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from railbook.auth.deps import get_current_session, get_user_store
from railbook.context import AppContext, get_context
from railbook.db.store import DataStore
from railbook.errors import BookingError
from railbook.schemas.booking import BookingCreateRequest, BookingRecord, BookingWithTrain
from railbook.services import bookings as booking_service
from railbook.session import Session

router = APIRouter(tags=["bookings"])


@router.post("", response_model=BookingRecord, status_code=status.HTTP_201_CREATED)
async def create_booking(
    req: BookingCreateRequest,
    session: Session = Depends(get_current_session),
    store: DataStore = Depends(get_user_store),
    context: AppContext = Depends(get_context),
):
    """Validate the passenger and book one seat on the train for the signed-in user."""
    form = dict(req.passenger)
    # the booking form starts out with the account email
    form.setdefault("email", session.email)
    try:
        return await booking_service.book_train(
            store, req.train_id, form, req.journey_date, session.user_id, context.codes
        )
    except BookingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)


@router.get("", response_model=List[BookingWithTrain])
async def my_bookings(session: Session = Depends(get_current_session), store: DataStore = Depends(get_user_store)):
    try:
        return await booking_service.list_bookings(store, session.user_id)
    except BookingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_booking(booking_id: int, store: DataStore = Depends(get_user_store)):
    """Delete the booking outright. There is no cancelled state to keep."""
    try:
        await booking_service.cancel_booking(store, booking_id)
    except BookingError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
