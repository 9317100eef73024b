from app.domain.entities.catalog import Vehicle, VehicleStatus


class VehicleRepo:
    async def get(self, vehicle_id: int) -> Vehicle | None:
        raise NotImplementedError

    async def set_status(self, vehicle_id: int, status: VehicleStatus) -> None:
        raise NotImplementedError
