from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.catalog_repo import CatalogRepo
from app.application.interfaces.vehicle_repo import VehicleRepo
from app.domain.entities.catalog import ExtraPrice, Location, Vehicle, VehicleStatus
from app.infrastructure.db.tables import extra_prices, locations, vehicles


class VehicleRepoSQL(VehicleRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, vehicle_id: int) -> Vehicle | None:
        stmt = select(vehicles).where(vehicles.c.id == vehicle_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return Vehicle(
            id=row["id"],
            name=row["name"],
            daily_rate=row["daily_rate"],
            weekly_rate=row["weekly_rate"],
            monthly_rate=row["monthly_rate"],
            status=VehicleStatus(row["status"]),
        )

    async def set_status(self, vehicle_id: int, status: VehicleStatus) -> None:
        stmt = update(vehicles).where(vehicles.c.id == vehicle_id).values(status=status.value)
        await self._session.execute(stmt)


class CatalogRepoSQL(CatalogRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_location(self, location_id: int) -> Location | None:
        stmt = select(locations).where(locations.c.id == location_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return Location(id=row["id"], name=row["name"], is_active=bool(row["is_active"]))

    async def get_extra(self, extra_id: int) -> ExtraPrice | None:
        stmt = select(extra_prices).where(extra_prices.c.id == extra_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return ExtraPrice(
            id=row["id"],
            name=row["name"],
            daily_price=row["daily_price"],
            weekly_price=row["weekly_price"],
            monthly_price=row["monthly_price"],
            is_active=bool(row["is_active"]),
        )
