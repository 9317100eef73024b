from app.domain.entities.catalog import ExtraPrice, Location


class CatalogRepo:
    """Read-only access to branches and extras."""

    async def get_location(self, location_id: int) -> Location | None:
        raise NotImplementedError

    async def get_extra(self, extra_id: int) -> ExtraPrice | None:
        raise NotImplementedError
