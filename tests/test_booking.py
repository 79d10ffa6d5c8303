"""
tests.test_booking

Booking, chamber assignment and staff status changes.
"""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hotel_desk.db.models import (
    NOT_ASSIGNED,
    ChamberStatus,
    Reservation,
    ReservationHistory,
    ReservationStatus,
)
from hotel_desk.db.repositories.chambers import ChamberRepo
from hotel_desk.services.booking_service import BookingRequest, BookingService
from hotel_desk.services.errors import InvalidInputError, NotFoundError
from hotel_desk.services.reservation_service import ReservationService
from tests.conftest import add_room


def request(**overrides) -> BookingRequest:
    fields = dict(
        first_name="Ada",
        last_name="Byron",
        email="ada@example.com",
        phone="+44 20 0000 0000",
        check_in=date(2025, 3, 1),
        check_out=date(2025, 3, 4),
        room_type="Deluxe",
        guests=2,
    )
    fields.update(overrides)
    return BookingRequest(**fields)


@pytest.mark.asyncio
async def test_booking_claims_an_available_chamber(sessionmaker: async_sessionmaker[AsyncSession]) -> None:
    async with sessionmaker() as session:
        await add_room(session, "Deluxe", chambers=("101", "102"))

        reservation = await BookingService(session=session).book(request())

    assert reservation.status is ReservationStatus.pending
    assert reservation.chamber_number == "101"

    async with sessionmaker() as session:
        chamber = await ChamberRepo(session).get_by_number("101")
        assert chamber is not None
        assert chamber.status is ChamberStatus.reserved
        assert chamber.id == reservation.chamber_id


@pytest.mark.asyncio
async def test_booking_without_free_chamber_is_not_assigned(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> None:
    async with sessionmaker() as session:
        await add_room(session, "Deluxe", chambers=("101",))
        service = BookingService(session=session)

        first = await service.book(request())
        second = await service.book(request(email="other@example.com"))

    assert first.chamber_number == "101"
    assert second.status is ReservationStatus.not_assigned
    assert second.chamber_number == NOT_ASSIGNED
    assert second.chamber_id is None


@pytest.mark.asyncio
async def test_claim_is_compare_and_swap(sessionmaker: async_sessionmaker[AsyncSession]) -> None:
    async with sessionmaker() as session:
        await add_room(session, "Deluxe", chambers=("101",))
        chamber = await ChamberRepo(session).get_by_number("101")
        assert chamber is not None

        chambers = ChamberRepo(session)
        assert await chambers.claim(chamber.id) is True
        assert await chambers.claim(chamber.id) is False
        assert await chambers.release(chamber.id) is True
        assert await chambers.release(chamber.id) is False


@pytest.mark.asyncio
async def test_failed_assignment_rolls_back_everything(
    sessionmaker: async_sessionmaker[AsyncSession], monkeypatch: pytest.MonkeyPatch
) -> None:
    async def boom(self, chamber_id):
        raise RuntimeError("connection dropped")

    async with sessionmaker() as session:
        await add_room(session, "Deluxe", chambers=("101",))
        monkeypatch.setattr(ChamberRepo, "claim", boom)

        with pytest.raises(RuntimeError):
            await BookingService(session=session).book(request())

    async with sessionmaker() as session:
        rows = (await session.execute(select(Reservation))).scalars().all()
        chamber = await ChamberRepo(session).get_by_number("101")
    assert rows == []
    assert chamber is not None
    assert chamber.status is ChamberStatus.available


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"first_name": " "}, "first_name"),
        ({"check_out": date(2025, 3, 1)}, "Check-out"),
        ({"guests": 0}, "guest"),
        ({"guests": 5}, "at most"),
        ({"room_type": "Penthouse"}, "Unknown room type"),
    ],
)
async def test_booking_validation(
    sessionmaker: async_sessionmaker[AsyncSession], overrides: dict, message: str
) -> None:
    async with sessionmaker() as session:
        await add_room(session, "Deluxe", chambers=("101",))
        with pytest.raises(InvalidInputError, match=message):
            await BookingService(session=session).book(request(**overrides))


@pytest.mark.asyncio
async def test_status_change_is_recorded_and_cancel_releases_chamber(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> None:
    async with sessionmaker() as session:
        await add_room(session, "Deluxe", chambers=("101",))
        reservation = await BookingService(session=session).book(request())
        service = ReservationService(session=session)

        await service.change_status(
            reservation_id=reservation.id, status=ReservationStatus.confirmed, changed_by=None
        )
        cancelled = await service.change_status(
            reservation_id=reservation.id, status=ReservationStatus.cancelled, changed_by=None
        )
        assert cancelled.chamber_number == NOT_ASSIGNED
        reservation_id = reservation.id

    async with sessionmaker() as session:
        history = (
            await session.execute(
                select(ReservationHistory)
                .where(ReservationHistory.reservation_id == reservation_id)
                .order_by(ReservationHistory.changed_at)
            )
        ).scalars().all()
        chamber = await ChamberRepo(session).get_by_number("101")

    changes = {(h.field_changed, h.old_value, h.new_value) for h in history}
    assert ("status", "pending", "confirmed") in changes
    assert ("status", "confirmed", "cancelled") in changes
    assert ("chamber_number", "101", NOT_ASSIGNED) in changes
    assert chamber is not None
    assert chamber.status is ChamberStatus.available


@pytest.mark.asyncio
async def test_status_change_rejects_unknown_or_manual_only(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> None:
    async with sessionmaker() as session:
        service = ReservationService(session=session)
        with pytest.raises(NotFoundError):
            await service.change_status(
                reservation_id=uuid.uuid4(), status=ReservationStatus.confirmed, changed_by=None
            )
        with pytest.raises(InvalidInputError):
            await service.change_status(
                reservation_id=uuid.uuid4(), status=ReservationStatus.not_assigned, changed_by=None
            )
