from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from railbook.config import settings
from railbook.db.base import Base


def engine_options(url: str) -> dict:
    """Keyword arguments for ``create_async_engine`` suited to the backend in ``url``."""
    options = {"echo": settings.DEBUG}
    if make_url(url).get_backend_name() != "sqlite":
        # postgres connections can go stale behind a proxy between requests
        options.update(pool_pre_ping=True, pool_size=5, max_overflow=10)
    return options


DATABASE_URL = str(settings.DATABASE_URL)

engine = create_async_engine(DATABASE_URL, **engine_options(DATABASE_URL))

# rows stay readable after commit so routers can serialise them
async_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    """One session per request, closed when the response is done."""
    async with async_session() as session:
        yield session


async def create_schema():
    """Create all tables directly from the models. Migrations are the normal path."""
    import railbook.models  # noqa: F401  registers the mappers on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping():
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
