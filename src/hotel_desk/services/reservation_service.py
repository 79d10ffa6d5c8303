"""
hotel_desk.services.reservation_service

Staff-side reservation changes.

Responsibilities:
- Change a reservation's status and record the change in the history log.
- Release the claimed chamber when a reservation is cancelled or deleted.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.db.models import NOT_ASSIGNED, Reservation, ReservationStatus
from hotel_desk.db.repositories.chambers import ChamberRepo
from hotel_desk.db.repositories.history import HistoryRepo
from hotel_desk.db.repositories.reservations import ReservationRepo
from hotel_desk.db.repositories.rooms import RoomRepo
from hotel_desk.observability.logging import get_logger
from hotel_desk.services.errors import InvalidInputError, NotFoundError

log = get_logger(__name__)

# Statuses staff may set by hand; `not_assigned` is only ever set by the booking flow.
SETTABLE_STATUSES = frozenset(
    {ReservationStatus.pending, ReservationStatus.confirmed, ReservationStatus.cancelled}
)

# Guest-editable fields on a user's own reservation.
GUEST_FIELDS = ("check_in", "check_out", "room_type", "guests", "special_requests")


class ReservationService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._reservations = ReservationRepo(session)
        self._chambers = ChamberRepo(session)
        self._rooms = RoomRepo(session)
        self._history = HistoryRepo(session)

    async def change_status(
        self,
        *,
        reservation_id: uuid.UUID,
        status: ReservationStatus,
        changed_by: uuid.UUID | None,
    ) -> Reservation:
        if status not in SETTABLE_STATUSES:
            raise InvalidInputError(f"Status {status.value} cannot be set manually")

        reservation = await self._reservations.lock(reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation not found")

        old = reservation.status
        if old == status:
            return reservation

        try:
            reservation.status = status
            await self._history.add(
                reservation_id=reservation.id,
                field_changed="status",
                old_value=old.value,
                new_value=status.value,
                changed_by=changed_by,
            )
            if status is ReservationStatus.cancelled:
                await self._release_chamber(reservation, changed_by=changed_by)
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

        log.info(
            "reservation_status_changed",
            reservation_id=str(reservation.id),
            old=old.value,
            new=status.value,
        )
        return reservation

    async def update_guest_fields(
        self, *, reservation: Reservation, changes: dict[str, Any]
    ) -> Reservation:
        unknown = set(changes) - set(GUEST_FIELDS)
        if unknown:
            raise InvalidInputError(f"Fields not editable: {', '.join(sorted(unknown))}")
        check_in = changes.get("check_in", reservation.check_in)
        check_out = changes.get("check_out", reservation.check_out)
        if check_in >= check_out:
            raise InvalidInputError("Check-out date must be after check-in date")
        if "room_type" in changes and changes["room_type"] != reservation.room_type:
            # A chamber of the old type no longer fits the booking.
            raise InvalidInputError("Room type cannot be changed; cancel and book again")
        if "guests" in changes:
            room = await self._rooms.get_by_type(reservation.room_type)
            if room is not None and changes["guests"] > room.guests:
                raise InvalidInputError(f"{room.room_type} holds at most {room.guests} guests")

        for field, value in changes.items():
            setattr(reservation, field, value)
        await self._session.commit()
        return reservation

    async def delete(self, *, reservation_id: uuid.UUID) -> None:
        reservation = await self._reservations.lock(reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation not found")
        try:
            if reservation.chamber_id is not None:
                await self._chambers.release(reservation.chamber_id)
            await self._reservations.delete(reservation.id)
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

    async def _release_chamber(self, reservation: Reservation, *, changed_by: uuid.UUID | None) -> None:
        if reservation.chamber_id is None:
            return
        await self._chambers.release(reservation.chamber_id)
        await self._history.add(
            reservation_id=reservation.id,
            field_changed="chamber_number",
            old_value=reservation.chamber_number,
            new_value=NOT_ASSIGNED,
            changed_by=changed_by,
        )
        reservation.chamber_id = None
        reservation.chamber_number = NOT_ASSIGNED
        await self._session.flush()
