from app.application.interfaces.catalog_repo import CatalogRepo
from app.application.interfaces.vehicle_repo import VehicleRepo
from app.domain.entities.catalog import ExtraPrice, Location, Vehicle, VehicleStatus


class InMemoryVehicleRepo(VehicleRepo):
    def __init__(self) -> None:
        self.vehicles: dict[int, Vehicle] = {}

    def add(self, vehicle: Vehicle) -> Vehicle:
        """Seeds a vehicle (testing / dev fixtures)."""
        self.vehicles[vehicle.id] = vehicle
        return vehicle

    async def get(self, vehicle_id: int) -> Vehicle | None:
        vehicle = self.vehicles.get(vehicle_id)
        if vehicle is None:
            return None
        return Vehicle(
            id=vehicle.id,
            name=vehicle.name,
            daily_rate=vehicle.daily_rate,
            weekly_rate=vehicle.weekly_rate,
            monthly_rate=vehicle.monthly_rate,
            status=vehicle.status,
        )

    async def set_status(self, vehicle_id: int, status: VehicleStatus) -> None:
        if vehicle_id not in self.vehicles:
            raise ValueError("Vehicle not found")
        self.vehicles[vehicle_id].status = status


class InMemoryCatalogRepo(CatalogRepo):
    def __init__(self) -> None:
        self.locations: dict[int, Location] = {}
        self.extras: dict[int, ExtraPrice] = {}

    def add_location(self, location: Location) -> Location:
        self.locations[location.id] = location
        return location

    def add_extra(self, extra: ExtraPrice) -> ExtraPrice:
        self.extras[extra.id] = extra
        return extra

    async def get_location(self, location_id: int) -> Location | None:
        return self.locations.get(location_id)

    async def get_extra(self, extra_id: int) -> ExtraPrice | None:
        return self.extras.get(extra_id)
