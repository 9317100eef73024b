from datetime import datetime
from typing import Sequence

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.booking_repo import BookingRepo
from app.domain.entities.booking import (
    SWEEPABLE_STATUSES,
    VEHICLE_HOLDING_STATUSES,
    Booking,
    BookingLine,
    BookingStatus,
)
from app.domain.value_objects.date_range import as_utc
from app.infrastructure.db.tables import booking_lines, bookings


def _opt_utc(moment: datetime | None) -> datetime | None:
    return as_utc(moment) if moment else None


class BookingRepoSQL(BookingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _lines_by_booking(self, booking_ids: Sequence[int]) -> dict[int, list[BookingLine]]:
        if not booking_ids:
            return {}
        stmt = (
            select(booking_lines)
            .where(booking_lines.c.booking_id.in_(booking_ids))
            .order_by(booking_lines.c.id)
        )
        result = await self._session.execute(stmt)
        grouped: dict[int, list[BookingLine]] = {}
        for row in result.mappings():
            grouped.setdefault(row["booking_id"], []).append(
                BookingLine(
                    id=row["id"],
                    booking_id=row["booking_id"],
                    extra_id=row["extra_id"],
                    quantity=row["quantity"],
                    unit_price=row["unit_price"],
                    total_price=row["total_price"],
                    created_at=_opt_utc(row["created_at"]),
                )
            )
        return grouped

    def _to_entity(self, row, lines: list[BookingLine] | None = None) -> Booking:
        return Booking(
            id=row["id"],
            booking_number=row["booking_number"],
            user_id=row["user_id"],
            vehicle_id=row["vehicle_id"],
            pickup_location_id=row["pickup_location_id"],
            return_location_id=row["return_location_id"],
            start=as_utc(row["start_at"]),
            end=as_utc(row["end_at"]),
            total_days=row["total_days"],
            rental_cost=row["rental_cost"],
            extras_cost=row["extras_cost"],
            discount=row["discount"],
            status=BookingStatus(row["status"]),
            notes=row["notes"],
            cancellation_reason=row["cancellation_reason"],
            lock_version=row["lock_version"],
            created_at=_opt_utc(row["created_at"]),
            updated_at=_opt_utc(row["updated_at"]),
            lines=lines or [],
        )

    async def _fetch(self, stmt, with_lines: bool = True) -> list[Booking]:
        result = await self._session.execute(stmt)
        rows = result.mappings().all()
        lines = await self._lines_by_booking([row["id"] for row in rows]) if with_lines else {}
        return [self._to_entity(row, lines.get(row["id"])) for row in rows]

    async def get_by_id(self, booking_id: int) -> Booking | None:
        stmt = select(bookings).where(bookings.c.id == booking_id).limit(1)
        found = await self._fetch(stmt)
        return found[0] if found else None

    async def list_by_user(
        self,
        user_id: str,
        status: BookingStatus | None = None,
    ) -> Sequence[Booking]:
        stmt = select(bookings).where(bookings.c.user_id == user_id)
        if status is not None:
            stmt = stmt.where(bookings.c.status == status.value)
        stmt = stmt.order_by(bookings.c.created_at.desc(), bookings.c.id.desc())
        return await self._fetch(stmt)

    async def add(self, booking: Booking) -> Booking:
        stmt = insert(bookings).values(
            booking_number=booking.booking_number,
            user_id=booking.user_id,
            vehicle_id=booking.vehicle_id,
            pickup_location_id=booking.pickup_location_id,
            return_location_id=booking.return_location_id,
            start_at=as_utc(booking.start),
            end_at=as_utc(booking.end),
            total_days=booking.total_days,
            rental_cost=booking.rental_cost,
            extras_cost=booking.extras_cost,
            discount=booking.discount,
            final_amount=booking.final_amount,
            status=booking.status.value,
            notes=booking.notes,
            cancellation_reason=booking.cancellation_reason,
            lock_version=booking.lock_version,
            created_at=as_utc(booking.created_at),
            updated_at=as_utc(booking.updated_at or booking.created_at),
        )
        result = await self._session.execute(stmt)
        booking.id = result.inserted_primary_key[0]

        for line in booking.lines:
            line.booking_id = booking.id
            line_result = await self._session.execute(
                insert(booking_lines).values(
                    booking_id=booking.id,
                    extra_id=line.extra_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    total_price=line.total_price,
                    created_at=as_utc(line.created_at or booking.created_at),
                )
            )
            line.id = line_result.inserted_primary_key[0]
        return booking

    async def update_status(self, booking: Booking, expected_lock_version: int) -> bool:
        stmt = (
            update(bookings)
            .where(
                bookings.c.id == booking.id,
                bookings.c.lock_version == expected_lock_version,
            )
            .values(
                status=booking.status.value,
                cancellation_reason=booking.cancellation_reason,
                updated_at=as_utc(booking.updated_at),
                lock_version=booking.lock_version,
            )
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def find_overlapping(
        self,
        vehicle_id: int,
        start: datetime,
        end: datetime,
        exclude_booking_id: int | None = None,
    ) -> Sequence[Booking]:
        stmt = select(bookings).where(
            bookings.c.vehicle_id == vehicle_id,
            bookings.c.status != BookingStatus.CANCELED.value,
            bookings.c.start_at <= as_utc(end),
            bookings.c.end_at >= as_utc(start),
        )
        if exclude_booking_id is not None:
            stmt = stmt.where(bookings.c.id != exclude_booking_id)
        return await self._fetch(stmt, with_lines=False)

    async def list_overdue(self, now: datetime) -> Sequence[Booking]:
        stmt = (
            select(bookings)
            .where(
                bookings.c.end_at < as_utc(now),
                bookings.c.status.in_([s.value for s in SWEEPABLE_STATUSES]),
            )
            .order_by(bookings.c.end_at, bookings.c.id)
        )
        return await self._fetch(stmt, with_lines=False)

    async def has_other_holding_booking(self, vehicle_id: int, exclude_booking_id: int) -> bool:
        stmt = (
            select(bookings.c.id)
            .where(
                bookings.c.vehicle_id == vehicle_id,
                bookings.c.id != exclude_booking_id,
                bookings.c.status.in_([s.value for s in VEHICLE_HOLDING_STATUSES]),
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar() is not None
