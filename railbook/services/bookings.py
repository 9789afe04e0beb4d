import logging
from datetime import date
from typing import Any, List, Mapping

from railbook.db.store import DataStore
from railbook.errors import PersistenceError, SoldOutError, ValidationError
from railbook.metrics import BOOKING_FAILURES, BOOKINGS_CANCELLED, BOOKINGS_CREATED
from railbook.schemas.booking import BookingRecord, BookingWithTrain
from railbook.schemas.train import TrainRecord
from railbook.services import catalog
from railbook.services.booking_codes import BookingCodeGenerator
from railbook.services.validation import PassengerIn, validate_passenger

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "confirmed"


async def create_booking(
    store: DataStore,
    passenger: PassengerIn,
    train: TrainRecord,
    journey_date: date,
    user_id: int,
    codes: BookingCodeGenerator,
) -> BookingRecord:
    """Persist one confirmed booking for an already validated passenger.

    The fare is copied from the train so later price changes do not touch
    the booking. The train's seat count is left as is.
    """
    values = {
        "user_id": user_id,
        "train_id": train.id,
        "passenger_name": passenger.name,
        "passenger_age": passenger.age,
        "passenger_email": passenger.email,
        "seat_number": codes.seat_number(),
        "journey_date": journey_date,
        "total_amount": train.price_per_seat,
        "booking_reference": codes.booking_reference(),
        "booking_status": DEFAULT_STATUS,
    }
    try:
        booking = await store.insert_booking(values)
    except PersistenceError:
        BOOKING_FAILURES.labels(reason="persistence").inc()
        raise
    BOOKINGS_CREATED.inc()
    logger.info(
        "booking created",
        extra={"booking_id": booking.id, "booking_reference": booking.booking_reference, "train_id": train.id},
    )
    return booking


async def book_train(
    store: DataStore,
    train_id: int,
    passenger_form: Mapping[str, Any],
    journey_date: date,
    user_id: int,
    codes: BookingCodeGenerator,
) -> BookingRecord:
    train = await catalog.get_train(store, train_id)
    # a sold out train is refused whatever the form says
    if train.available_seats <= 0:
        BOOKING_FAILURES.labels(reason="sold_out").inc()
        raise SoldOutError("This train is fully booked")
    try:
        passenger = validate_passenger(passenger_form)
    except ValidationError:
        BOOKING_FAILURES.labels(reason="validation").inc()
        raise
    return await create_booking(store, passenger, train, journey_date, user_id, codes)


async def list_bookings(store: DataStore, user_id: int) -> List[BookingWithTrain]:
    """The user's bookings with train details, most recent first."""
    try:
        return await store.find_bookings(user_id)
    except PersistenceError as exc:
        raise PersistenceError("Failed to fetch bookings") from exc


async def cancel_booking(store: DataStore, booking_id: int) -> None:
    try:
        deleted = await store.delete_booking(booking_id)
    except PersistenceError as exc:
        raise PersistenceError("Failed to cancel booking") from exc
    if deleted:
        BOOKINGS_CANCELLED.inc()
        logger.info("booking cancelled", extra={"booking_id": booking_id})
    else:
        logger.info("cancel matched no booking", extra={"booking_id": booking_id})
