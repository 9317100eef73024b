from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import AsyncSessionLocal
from app.application.interfaces.booking_number_generator import (
    BookingNumberGenerator,
    RealBookingNumberGenerator,
)
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.catalog_repo import CatalogRepo
from app.application.interfaces.clock import Clock, SystemClock
from app.application.interfaces.lock_manager import LockManager
from app.application.interfaces.loyalty_repo import LoyaltyRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.interfaces.vehicle_repo import VehicleRepo
from app.application.services.availability_checker import AvailabilityChecker
from app.application.services.booking_pricing import BookingPricing
from app.application.services.vehicle_flags import VehicleFlags
from app.application.use_cases.advance_booking import AdvanceBookingUseCase
from app.application.use_cases.award_points import AwardPointsUseCase, ProcessBookingPointsUseCase
from app.application.use_cases.cancel_booking import CancelBookingUseCase
from app.application.use_cases.cleanup_sweep import CleanupSweepUseCase
from app.application.use_cases.create_booking import CreateBookingUseCase
from app.application.use_cases.estimate_booking_cost import EstimateBookingCostUseCase
from app.application.use_cases.expire_points_sweep import ExpirePointsSweepUseCase
from app.application.use_cases.get_booking import GetBookingUseCase, ListUserBookingsUseCase
from app.application.use_cases.loyalty_summary import (
    GetLoyaltySummaryUseCase,
    ListLoyaltyTransactionsUseCase,
)
from app.application.use_cases.redeem_points import RedeemPointsUseCase
from app.config import Settings, get_settings
from app.infrastructure.db.lock_manager import SQLAlchemyLockManager
from app.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from app.infrastructure.db.repositories.catalog_repo_sql import CatalogRepoSQL, VehicleRepoSQL
from app.infrastructure.db.repositories.loyalty_repo_sql import LoyaltyRepoSQL
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from app.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from app.infrastructure.in_memory.catalog_repo import InMemoryCatalogRepo, InMemoryVehicleRepo
from app.infrastructure.in_memory.lock_manager import InMemoryLockManager
from app.infrastructure.in_memory.loyalty_repo import InMemoryLoyaltyRepo
from app.infrastructure.in_memory.transaction_manager import NoopTransactionManager


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session


@lru_cache(maxsize=1)
def _in_memory_bundle():
    # Locks must outlive the request for the critical sections to mean anything.
    return {
        "booking_repo": InMemoryBookingRepo(),
        "vehicle_repo": InMemoryVehicleRepo(),
        "catalog_repo": InMemoryCatalogRepo(),
        "loyalty_repo": InMemoryLoyaltyRepo(),
        "lock_manager": InMemoryLockManager(),
        "tx_manager": NoopTransactionManager(),
    }


def get_clock() -> Clock:
    return SystemClock()


def build_use_cases(
    settings: Settings,
    booking_repo: BookingRepo,
    vehicle_repo: VehicleRepo,
    catalog_repo: CatalogRepo,
    loyalty_repo: LoyaltyRepo,
    lock_manager: LockManager,
    tx_manager: TransactionManager,
    clock: Clock,
    number_generator: BookingNumberGenerator | None = None,
) -> dict:
    policy = settings.loyalty_policy()
    availability_checker = AvailabilityChecker(vehicle_repo, booking_repo)
    pricing = BookingPricing(catalog_repo)
    vehicle_flags = VehicleFlags(vehicle_repo, booking_repo)
    award_points = AwardPointsUseCase(
        loyalty_repo=loyalty_repo,
        lock_manager=lock_manager,
        transaction_manager=tx_manager,
        clock=clock,
        policy=policy,
    )
    process_points = ProcessBookingPointsUseCase(award_points=award_points, policy=policy)

    return {
        "create_booking": CreateBookingUseCase(
            booking_repo=booking_repo,
            vehicle_repo=vehicle_repo,
            pricing=pricing,
            availability_checker=availability_checker,
            lock_manager=lock_manager,
            transaction_manager=tx_manager,
            clock=clock,
            number_generator=number_generator or RealBookingNumberGenerator(),
        ),
        "cancel_booking": CancelBookingUseCase(
            booking_repo=booking_repo,
            vehicle_flags=vehicle_flags,
            lock_manager=lock_manager,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "get_booking": GetBookingUseCase(booking_repo=booking_repo, transaction_manager=tx_manager),
        "list_bookings": ListUserBookingsUseCase(
            booking_repo=booking_repo, transaction_manager=tx_manager
        ),
        "advance_booking": AdvanceBookingUseCase(
            booking_repo=booking_repo,
            vehicle_flags=vehicle_flags,
            process_points=process_points,
            lock_manager=lock_manager,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "estimate_cost": EstimateBookingCostUseCase(
            vehicle_repo=vehicle_repo,
            pricing=pricing,
            availability_checker=availability_checker,
            transaction_manager=tx_manager,
            policy=policy,
        ),
        "cleanup_sweep": CleanupSweepUseCase(
            booking_repo=booking_repo,
            vehicle_flags=vehicle_flags,
            lock_manager=lock_manager,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "award_points": award_points,
        "process_booking_points": process_points,
        "redeem_points": RedeemPointsUseCase(
            loyalty_repo=loyalty_repo,
            lock_manager=lock_manager,
            transaction_manager=tx_manager,
            clock=clock,
            policy=policy,
        ),
        "expire_points": ExpirePointsSweepUseCase(
            loyalty_repo=loyalty_repo,
            lock_manager=lock_manager,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "loyalty_summary": GetLoyaltySummaryUseCase(
            loyalty_repo=loyalty_repo,
            transaction_manager=tx_manager,
            clock=clock,
            policy=policy,
            recent_limit=settings.recent_transactions_limit,
        ),
        "loyalty_transactions": ListLoyaltyTransactionsUseCase(
            loyalty_repo=loyalty_repo, transaction_manager=tx_manager
        ),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    if settings.use_in_memory:
        bundle = _in_memory_bundle()
        return build_use_cases(settings=settings, clock=clock, **bundle)

    if not session:
        raise RuntimeError("DB session not available")

    return build_use_cases(
        settings=settings,
        booking_repo=BookingRepoSQL(session),
        vehicle_repo=VehicleRepoSQL(session),
        catalog_repo=CatalogRepoSQL(session),
        loyalty_repo=LoyaltyRepoSQL(session),
        lock_manager=SQLAlchemyLockManager(session),
        tx_manager=SQLAlchemyTransactionManager(session),
        clock=clock,
    )
