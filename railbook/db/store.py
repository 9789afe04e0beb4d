"""Data-layer operations the booking flows are allowed to use.

``DataStore`` is the only place that builds SQL. Rows leave it as pydantic
records, so a row that breaks a field constraint is reported as a
``PersistenceError`` at this boundary instead of surfacing later in a view.

A store opened with ``owner_id`` applies a row-level access policy to
bookings: reads, inserts and deletes only ever touch that user's rows.
"""
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete as sa_delete
from sqlalchemy import select as sa_select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from railbook.errors import PersistenceError
from railbook.models.models import Booking, Train
from railbook.schemas.booking import BookingRecord, BookingWithTrain
from railbook.schemas.train import TrainRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _reason(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class DataStore:
    def __init__(self, db: AsyncSession, owner_id: Optional[int] = None):
        self.db = db
        self.owner_id = owner_id

    def _scoped(self, stmt):
        if self.owner_id is not None:
            stmt = stmt.where(Booking.user_id == self.owner_id)
        return stmt

    @staticmethod
    def _record(model: Type[RecordT], row) -> RecordT:
        try:
            return model.model_validate(row)
        except PydanticValidationError as exc:
            logger.error("malformed %s row id=%s: %s", model.__name__, getattr(row, "id", None), exc)
            raise PersistenceError(f"Malformed {model.__name__} record") from exc

    async def _scalars(self, stmt) -> list:
        try:
            res = await self.db.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error("store read failed: %s", _reason(exc))
            raise PersistenceError(_reason(exc)) from exc
        return list(res.scalars().all())

    async def find_trains(self, from_fragment: str = "", to_fragment: str = "") -> List[TrainRecord]:
        stmt = sa_select(Train)
        if from_fragment:
            stmt = stmt.where(Train.from_station.icontains(from_fragment, autoescape=True))
        if to_fragment:
            stmt = stmt.where(Train.to_station.icontains(to_fragment, autoescape=True))
        stmt = stmt.order_by(Train.departure_time, Train.id)
        return [self._record(TrainRecord, t) for t in await self._scalars(stmt)]

    async def get_train(self, train_id: int) -> Optional[TrainRecord]:
        rows = await self._scalars(sa_select(Train).where(Train.id == train_id))
        if not rows:
            return None
        return self._record(TrainRecord, rows[0])

    async def insert_booking(self, values: Dict[str, Any]) -> BookingRecord:
        if self.owner_id is not None and values.get("user_id") != self.owner_id:
            raise PersistenceError("Booking owner does not match the signed-in user")
        booking = Booking(**values)
        try:
            self.db.add(booking)
            await self.db.commit()
            await self.db.refresh(booking)
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error("booking insert failed: %s", _reason(exc))
            raise PersistenceError(_reason(exc)) from exc
        return self._record(BookingRecord, booking)

    async def find_bookings(self, user_id: int) -> List[BookingWithTrain]:
        stmt = (
            sa_select(Booking)
            .options(joinedload(Booking.train))
            .where(Booking.user_id == user_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .execution_options(populate_existing=True)
        )
        rows = await self._scalars(self._scoped(stmt))
        return [self._record(BookingWithTrain, b) for b in rows]

    async def delete_booking(self, booking_id: int) -> int:
        stmt = self._scoped(sa_delete(Booking).where(Booking.id == booking_id))
        try:
            res = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error("booking delete failed: %s", _reason(exc))
            raise PersistenceError(_reason(exc)) from exc
        return res.rowcount
