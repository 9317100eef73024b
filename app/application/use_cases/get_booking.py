from app.application.dtos.booking_dto import BookingDTO
from app.application.error_boundary import error_boundary
from app.application.interfaces.booking_repo import BookingRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.booking import BookingStatus
from app.domain.errors import BookingNotFoundError
from app.domain.labels import Language


class GetBookingUseCase:
    def __init__(self, booking_repo: BookingRepo, transaction_manager: TransactionManager) -> None:
        self._booking_repo = booking_repo
        self._transaction_manager = transaction_manager

    @error_boundary("get_booking")
    async def execute(
        self, booking_id: int, requester_id: str, language: Language = Language.EN
    ) -> BookingDTO:
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get_by_id(booking_id)
        # someone else's booking is reported as missing
        if booking is None or booking.user_id != requester_id:
            raise BookingNotFoundError(booking_id)
        return BookingDTO.from_entity(booking, language)


class ListUserBookingsUseCase:
    def __init__(self, booking_repo: BookingRepo, transaction_manager: TransactionManager) -> None:
        self._booking_repo = booking_repo
        self._transaction_manager = transaction_manager

    @error_boundary("list_user_bookings")
    async def execute(
        self,
        user_id: str,
        status: BookingStatus | None = None,
        language: Language = Language.EN,
    ) -> list[BookingDTO]:
        async with self._transaction_manager.start():
            bookings = await self._booking_repo.list_by_user(user_id, status)
        return [BookingDTO.from_entity(booking, language) for booking in bookings]
