"""
hotel_desk.db.models

Persistence schema for the hotel back office.

Responsibilities:
- Identity tables: Profile (stores a role) and Employee (role derived at login).
- Back-office tables: Task, StockItem.
- Booking tables: Room (type catalog), RoomChamber (physical room), Reservation,
  ReservationHistory (append-only change log).
"""

from __future__ import annotations

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import JSON, Enum, ForeignKey, Index, String, Text, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from hotel_desk.auth.models import Role
from hotel_desk.db.base import Base


def _utcnow() -> datetime:
    # Persist naive UTC timestamps for simplicity; production systems may use tz-aware types.
    return datetime.utcnow()


class TaskStatus(enum.StrEnum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class ChamberStatus(enum.StrEnum):
    available = "available"
    reserved = "reserved"
    occupied = "occupied"
    maintenance = "maintenance"


class ReservationStatus(enum.StrEnum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    not_assigned = "not_assigned"


NOT_ASSIGNED = "not assigned"


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    # Only roles that can be stored; reservation employees live in `employees`.
    role: Mapped[Role] = mapped_column(Enum(Role), nullable=False, index=True)
    code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    first_name: Mapped[str] = mapped_column(String(128), nullable=False)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    telephone: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    address: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    ccp: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    # Department tag ("stock", "reservation"); never used as the session role.
    role: Mapped[str] = mapped_column(String(64), nullable=False, default="reservation", index=True)
    code: Mapped[str | None] = mapped_column(String(32), nullable=True, unique=True)
    file_path: Mapped[str | None] = mapped_column(String(512), nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[TaskStatus] = mapped_column(
        Enum(TaskStatus), nullable=False, default=TaskStatus.pending, index=True
    )
    assigned_to: Mapped[uuid.UUID | None] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)


class StockItem(Base):
    __tablename__ = "stock"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    category: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(nullable=False, default=0)
    unit: Mapped[str] = mapped_column(String(32), nullable=False)
    price: Mapped[float] = mapped_column(nullable=False, default=0.0)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_restocked: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    room_type: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    guests: Mapped[int] = mapped_column(nullable=False)
    size_m2: Mapped[int] = mapped_column(nullable=False)
    beds: Mapped[int] = mapped_column(nullable=False)
    price_per_night: Mapped[float] = mapped_column(nullable=False)
    rating: Mapped[float] = mapped_column(nullable=False, default=0.0)
    amenities: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    features: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    image_urls: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    cancellation_policy: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)


class RoomChamber(Base):
    __tablename__ = "room_chambers"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    chamber_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    room_type: Mapped[str] = mapped_column(String(128), nullable=False)
    status: Mapped[ChamberStatus] = mapped_column(
        Enum(ChamberStatus), nullable=False, default=ChamberStatus.available
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    __table_args__ = (Index("ix_chambers_type_status", "room_type", "status"),)


class Reservation(Base):
    __tablename__ = "reservations"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    # Set when a logged-in reservation user books; public bookings leave it empty.
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True,
        index=True,
    )

    first_name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(256), nullable=False, default="", index=True)
    phone: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    check_in: Mapped[date] = mapped_column(nullable=False)
    check_out: Mapped[date] = mapped_column(nullable=False)
    room_type: Mapped[str] = mapped_column(String(128), nullable=False)
    guests: Mapped[int] = mapped_column(nullable=False, default=1)
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus), nullable=False, default=ReservationStatus.pending, index=True
    )
    chamber_id: Mapped[uuid.UUID | None] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("room_chambers.id", ondelete="SET NULL"), nullable=True
    )
    chamber_number: Mapped[str] = mapped_column(String(32), nullable=False, default=NOT_ASSIGNED)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)


class ReservationHistory(Base):
    __tablename__ = "reservation_history"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    reservation_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), nullable=False, index=True
    )
    field_changed: Mapped[str] = mapped_column(String(64), nullable=False)
    old_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    new_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Employee id for staff edits; None for system changes.
    changed_by: Mapped[uuid.UUID | None] = mapped_column(SAUuid(as_uuid=True), nullable=True)

    changed_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)


# --- Module Notes -----------------------------------------------------------
# `room_chambers.room_type` references the catalog by name, not by id, so catalog rows
# can be recreated without orphaning chambers.
