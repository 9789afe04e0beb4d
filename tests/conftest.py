import os
import tempfile

# settings are read at import time, so point them at a throwaway database first
_TMP_DIR = tempfile.mkdtemp(prefix="railbook-tests-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_TMP_DIR, "railbook.db")
os.environ["DEBUG"] = "false"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["CREATE_SCHEMA_ON_STARTUP"] = "false"

import random
from datetime import time
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from railbook.context import AppContext
from railbook.db.base import Base
from railbook.db.session import async_session, engine
from railbook.db.store import DataStore
from railbook.main import app
from railbook.models.models import Train, User
from railbook.services import auth as auth_service
from railbook.services.booking_codes import BookingCodeGenerator

TRAINS = [
    ("12951", "Mumbai Rajdhani", "New Delhi", "Mumbai Central", time(16, 55), time(8, 35), 120, Decimal("2875.00")),
    ("12909", "Garib Rath", "DELHI Sarai Rohilla", "Bandra Terminus MUMBAI", time(15, 35), time(7, 35), 40, Decimal("1210.50")),
    ("12627", "Karnataka Express", "New Delhi", "KSR Bengaluru", time(20, 20), time(13, 40), 200, Decimal("1450.00")),
    ("12007", "Mysuru Shatabdi", "MGR Chennai Central", "Mysuru Junction", time(6, 0), time(13, 0), 64, Decimal("1165.00")),
    ("22119", "Mumbai Tejas", "Mumbai CSMT", "Madgaon", time(5, 50), time(14, 40), 0, Decimal("1590.00")),
    ("09001", "Festival Special", "100% Junction", "Under_score Halt", time(9, 0), time(11, 0), 10, Decimal("0.00")),
]


@pytest_asyncio.fixture
async def schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    # connections are bound to the test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def db(schema):
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def trains(db):
    """Seeded trains keyed by train number."""
    rows = {}
    for number, name, origin, destination, departs, arrives, seats, price in TRAINS:
        train = Train(
            train_number=number,
            train_name=name,
            from_station=origin,
            to_station=destination,
            departure_time=departs,
            arrival_time=arrives,
            available_seats=seats,
            price_per_seat=price,
        )
        db.add(train)
        rows[number] = train
    await db.commit()
    return {number: train.id for number, train in rows.items()}


@pytest_asyncio.fixture
async def make_user(db):
    async def _make(email="traveller@example.com", password="secret-pass"):
        user = User(email=email, full_name="Test Traveller", hashed_password=auth_service.hash_password(password))
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    return _make


@pytest.fixture
def store(db):
    return DataStore(db)


@pytest.fixture
def codes():
    return BookingCodeGenerator(rng=random.Random(2024), clock=lambda: 1_700_000_000.123)


@pytest_asyncio.fixture
async def client(schema, codes):
    previous = app.state.context
    app.state.context = AppContext(codes=codes)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.state.context = previous


@pytest_asyncio.fixture
async def signed_in(client):
    """Register and sign in through the API; returns (user id, auth headers)."""

    async def _sign_in(email="traveller@example.com", password="secret-pass"):
        reg = await client.post("/auth/register", json={"email": email, "password": password, "full_name": "Test Traveller"})
        assert reg.status_code == 201, reg.text
        login = await client.post("/auth/login", data={"username": email, "password": password})
        assert login.status_code == 200, login.text
        return reg.json()["id"], {"Authorization": f"Bearer {login.json()['access_token']}"}

    return _sign_in
