"""
hotel_desk.services.booking_service

Public booking flow.

Responsibilities:
- Validate a booking request against the room catalog.
- Create the reservation and claim a chamber in ONE transaction: either the
  reservation and the chamber agree, or nothing is written.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.db.models import NOT_ASSIGNED, Reservation, ReservationStatus
from hotel_desk.db.repositories.chambers import ChamberRepo
from hotel_desk.db.repositories.reservations import ReservationRepo
from hotel_desk.db.repositories.rooms import RoomRepo
from hotel_desk.observability.logging import get_logger
from hotel_desk.services.errors import InvalidInputError

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BookingRequest:
    first_name: str
    last_name: str
    email: str
    phone: str
    check_in: date
    check_out: date
    room_type: str
    guests: int = 1
    special_requests: str | None = None
    user_id: uuid.UUID | None = None


def validate_booking(req: BookingRequest) -> None:
    required = {"room_type": req.room_type}
    # Anonymous bookings must carry contact details; user bookings are tied to a profile.
    if req.user_id is None:
        required.update(
            first_name=req.first_name,
            last_name=req.last_name,
            email=req.email,
            phone=req.phone,
        )
    missing = [name for name, value in required.items() if not value or not value.strip()]
    if missing:
        raise InvalidInputError(f"Missing required fields: {', '.join(missing)}")
    if req.check_in >= req.check_out:
        raise InvalidInputError("Check-out date must be after check-in date")
    if req.guests < 1:
        raise InvalidInputError("At least one guest is required")


class BookingService:
    def __init__(self, *, session: AsyncSession, max_claim_attempts: int = 5) -> None:
        self._session = session
        self._max_claim_attempts = max_claim_attempts

        self._rooms = RoomRepo(session)
        self._chambers = ChamberRepo(session)
        self._reservations = ReservationRepo(session)

    async def book(self, req: BookingRequest) -> Reservation:
        validate_booking(req)
        room = await self._rooms.get_by_type(req.room_type)
        if room is None:
            raise InvalidInputError(f"Unknown room type: {req.room_type}")
        if req.guests > room.guests:
            raise InvalidInputError(f"{room.room_type} holds at most {room.guests} guests")

        try:
            reservation = await self._reservations.create(
                user_id=req.user_id,
                first_name=req.first_name.strip(),
                last_name=req.last_name.strip(),
                email=req.email.strip(),
                phone=req.phone.strip(),
                check_in=req.check_in,
                check_out=req.check_out,
                room_type=req.room_type,
                guests=req.guests,
                special_requests=req.special_requests or None,
                status=ReservationStatus.pending,
            )
            await self._assign_chamber(reservation)
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

        log.info(
            "booking_created",
            reservation_id=str(reservation.id),
            room_type=reservation.room_type,
            status=reservation.status.value,
        )
        return reservation

    async def _assign_chamber(self, reservation: Reservation) -> None:
        # Candidates can be taken by a concurrent booking between the read and the claim;
        # a failed claim just moves on to the next candidate.
        candidates = await self._chambers.available_candidates(
            reservation.room_type, limit=self._max_claim_attempts
        )
        for chamber in candidates:
            if await self._chambers.claim(chamber.id):
                reservation.chamber_id = chamber.id
                reservation.chamber_number = chamber.chamber_number
                reservation.status = ReservationStatus.pending
                await self._session.flush()
                return

        reservation.chamber_id = None
        reservation.chamber_number = NOT_ASSIGNED
        reservation.status = ReservationStatus.not_assigned
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# The transaction is committed exactly once, after the chamber decision; a crash
# anywhere before that leaves neither table changed.
