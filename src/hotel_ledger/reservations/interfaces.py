"""
Интерфейсы (порты) для контекста бронирования.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, Protocol, Tuple

from ..shared_kernel import (
    BookingId,
    Category,
    CustomerId,
    HotelId,
    Person,
    Price,
    RoomNumber,
    StayPeriod,
)

if TYPE_CHECKING:
    from .domain import Booking, Room


class ILogger(Protocol):
    """Интерфейс для логгера."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...


class ILedger(Protocol):
    """Интерфейс журнала отелей, используемый интерпретатором команд."""

    def add_hotel(self, hotel_id: HotelId, city: str) -> None: ...
    def add_room(
        self,
        hotel_id: HotelId,
        room_number: RoomNumber,
        category: Category,
        price: Price,
    ) -> None: ...
    def remove_room(self, hotel_id: HotelId, room_number: RoomNumber) -> None: ...
    def remove_hotel(self, hotel_id: HotelId) -> None: ...
    def list_rooms(self) -> Iterator[Tuple[HotelId, Room]]: ...
    def list_bookings(self) -> Iterator[Booking]: ...
    def available(
        self, city: str, category: Category, period: StayPeriod
    ) -> Iterator[Tuple[HotelId, Room]]: ...
    def book(
        self,
        hotel_id: HotelId,
        room_number: RoomNumber,
        period: StayPeriod,
        customer_id: CustomerId,
    ) -> BookingId: ...
    def get_or_create_customer(self, person: Person) -> CustomerId: ...
    def cancel(self, booking_id: BookingId, customer_id: CustomerId) -> None: ...
