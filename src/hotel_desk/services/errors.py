"""
hotel_desk.services.errors

Domain exceptions raised by services and mapped to HTTP responses in `api.app`.
"""

from __future__ import annotations


class HotelDeskError(Exception):
    """Base exception for domain failures."""

    error_code: str = "HOTEL_DESK_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(HotelDeskError):
    error_code = "NOT_FOUND"


class ConflictError(HotelDeskError):
    error_code = "CONFLICT"


class InvalidInputError(HotelDeskError):
    error_code = "VALIDATION_ERROR"
