import logging
from typing import List, Optional

from railbook.db.store import DataStore
from railbook.errors import NotFoundError, PersistenceError
from railbook.metrics import TRAIN_SEARCHES
from railbook.schemas.train import TrainRecord

logger = logging.getLogger(__name__)


async def search_trains(store: DataStore, from_fragment: Optional[str] = None, to_fragment: Optional[str] = None) -> List[TrainRecord]:
    """Trains whose stations contain the fragments, case-insensitively. Empty fragments match everything."""
    from_fragment = (from_fragment or "").strip()
    to_fragment = (to_fragment or "").strip()
    TRAIN_SEARCHES.inc()
    try:
        trains = await store.find_trains(from_fragment, to_fragment)
    except PersistenceError as exc:
        raise PersistenceError("Failed to fetch trains") from exc
    logger.info("train search from=%r to=%r matched=%d", from_fragment, to_fragment, len(trains))
    return trains


async def get_train(store: DataStore, train_id: int) -> TrainRecord:
    try:
        train = await store.get_train(train_id)
    except PersistenceError as exc:
        raise PersistenceError("Failed to fetch train details") from exc
    if train is None:
        raise NotFoundError("Train not found")
    return train
