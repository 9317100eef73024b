"""
Shared fixtures.

- FakeClock pinned at NOW for deterministic lifecycle rules
- In-memory repositories seeded with a small catalog
- SQLite (aiosqlite) engine/session for the SQL adapters
- FastAPI TestClient wired to the in-memory bundle
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import _in_memory_bundle, build_use_cases, get_clock
from app.application.interfaces.booking_number_generator import FakeBookingNumberGenerator
from app.application.interfaces.clock import FakeClock
from app.config import Settings
from app.domain.entities.catalog import ExtraPrice, Location, Vehicle, VehicleStatus
from app.infrastructure.db.engine import SQLITE_MEMORY_URL, build_sessionmaker, create_engine_for_url
from app.infrastructure.db.lock_manager import SQLAlchemyLockManager
from app.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from app.infrastructure.db.repositories.catalog_repo_sql import CatalogRepoSQL, VehicleRepoSQL
from app.infrastructure.db.repositories.loyalty_repo_sql import LoyaltyRepoSQL
from app.infrastructure.db.tables import extra_prices, locations, metadata, vehicles
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from app.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from app.infrastructure.in_memory.catalog_repo import InMemoryCatalogRepo, InMemoryVehicleRepo
from app.infrastructure.in_memory.lock_manager import InMemoryLockManager
from app.infrastructure.in_memory.loyalty_repo import InMemoryLoyaltyRepo
from app.infrastructure.in_memory.transaction_manager import NoopTransactionManager
from app.main import app

NOW = datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)

# ============================================================================
# CATALOG
# ============================================================================

CAR_ID = 1
MAINTENANCE_CAR_ID = 2
OTHER_CAR_ID = 3
AIRPORT_ID = 1
DOWNTOWN_ID = 2
CLOSED_BRANCH_ID = 3
GPS_ID = 1
RETIRED_EXTRA_ID = 2


def catalog_vehicles() -> list[Vehicle]:
    return [
        Vehicle(CAR_ID, "Toyota Camry", Decimal("100"), Decimal("600"), Decimal("2000")),
        Vehicle(
            MAINTENANCE_CAR_ID,
            "Hyundai Elantra",
            Decimal("80"),
            Decimal("500"),
            Decimal("1800"),
            status=VehicleStatus.MAINTENANCE,
        ),
        Vehicle(OTHER_CAR_ID, "Kia Sportage", Decimal("150"), Decimal("900"), Decimal("3000")),
    ]


def catalog_locations() -> list[Location]:
    return [
        Location(AIRPORT_ID, "Airport"),
        Location(DOWNTOWN_ID, "Downtown"),
        Location(CLOSED_BRANCH_ID, "Old Branch", is_active=False),
    ]


def catalog_extras() -> list[ExtraPrice]:
    return [
        ExtraPrice(GPS_ID, "GPS", Decimal("10"), Decimal("60"), Decimal("200")),
        ExtraPrice(
            RETIRED_EXTRA_ID, "Roof box", Decimal("5"), Decimal("30"), Decimal("100"), is_active=False
        ),
    ]


def seed_in_memory(vehicle_repo: InMemoryVehicleRepo, catalog_repo: InMemoryCatalogRepo) -> None:
    for vehicle in catalog_vehicles():
        vehicle_repo.add(vehicle)
    for location in catalog_locations():
        catalog_repo.add_location(location)
    for extra in catalog_extras():
        catalog_repo.add_extra(extra)


def days_from_now(days: float, hours: int = 0) -> datetime:
    return NOW + timedelta(days=days, hours=hours)


# ============================================================================
# IN-MEMORY FIXTURES
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def settings() -> Settings:
    return Settings(use_in_memory=True)


@pytest.fixture
def repos() -> dict:
    bundle = {
        "booking_repo": InMemoryBookingRepo(),
        "vehicle_repo": InMemoryVehicleRepo(),
        "catalog_repo": InMemoryCatalogRepo(),
        "loyalty_repo": InMemoryLoyaltyRepo(),
        "lock_manager": InMemoryLockManager(),
        "tx_manager": NoopTransactionManager(),
    }
    seed_in_memory(bundle["vehicle_repo"], bundle["catalog_repo"])
    return bundle


@pytest.fixture
def use_cases(repos: dict, clock: FakeClock, settings: Settings) -> dict:
    return build_use_cases(
        settings=settings,
        clock=clock,
        number_generator=FakeBookingNumberGenerator(),
        **repos,
    )


# ============================================================================
# SQL FIXTURES (SQLite in-memory)
# ============================================================================


@pytest_asyncio.fixture
async def sql_engine():
    engine = create_engine_for_url(SQLITE_MEMORY_URL)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        await conn.execute(
            insert(vehicles),
            [
                {
                    "id": v.id,
                    "name": v.name,
                    "daily_rate": v.daily_rate,
                    "weekly_rate": v.weekly_rate,
                    "monthly_rate": v.monthly_rate,
                    "status": v.status.value,
                }
                for v in catalog_vehicles()
            ],
        )
        await conn.execute(
            insert(locations),
            [{"id": loc.id, "name": loc.name, "is_active": loc.is_active} for loc in catalog_locations()],
        )
        await conn.execute(
            insert(extra_prices),
            [
                {
                    "id": e.id,
                    "name": e.name,
                    "daily_price": e.daily_price,
                    "weekly_price": e.weekly_price,
                    "monthly_price": e.monthly_price,
                    "is_active": e.is_active,
                }
                for e in catalog_extras()
            ],
        )
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sql_session(sql_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = build_sessionmaker(sql_engine)
    async with session_maker() as session:
        yield session


@pytest.fixture
def sql_use_cases(sql_session: AsyncSession, clock: FakeClock, settings: Settings) -> dict:
    return build_use_cases(
        settings=settings,
        booking_repo=BookingRepoSQL(sql_session),
        vehicle_repo=VehicleRepoSQL(sql_session),
        catalog_repo=CatalogRepoSQL(sql_session),
        loyalty_repo=LoyaltyRepoSQL(sql_session),
        lock_manager=SQLAlchemyLockManager(sql_session),
        tx_manager=SQLAlchemyTransactionManager(sql_session),
        clock=clock,
        number_generator=FakeBookingNumberGenerator(),
    )


# ============================================================================
# HTTP CLIENT
# ============================================================================


@pytest.fixture
def api_bundle() -> dict:
    _in_memory_bundle.cache_clear()
    bundle = _in_memory_bundle()
    seed_in_memory(bundle["vehicle_repo"], bundle["catalog_repo"])
    return bundle


@pytest.fixture
def client(api_bundle: dict, clock: FakeClock) -> Generator[TestClient, None, None]:
    """TestClient on the in-memory bundle with the clock pinned at NOW."""
    app.dependency_overrides[get_clock] = lambda: clock

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    _in_memory_bundle.cache_clear()
