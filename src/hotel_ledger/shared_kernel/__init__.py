"""
Общее ядро (Shared Kernel) для журнала бронирований отелей.

Содержит объекты-значения и исключения, используемые всеми слоями.
"""

from .domain import (
    U64_MAX,
    AuthorizationException,
    BookingId,
    Category,
    ConflictException,
    CustomerId,
    # Исключения
    DomainException,
    EntityNotFoundException,
    # Объекты-значения
    HotelId,
    ParseException,
    Person,
    Price,
    # Базовые типы
    RoomNumber,
    StayPeriod,
    UnknownCommandException,
    format_date,
    # Разбор
    parse_booking_id,
    parse_customer_id,
    parse_date,
    parse_room_number,
    parse_unsigned,
)

__all__ = [
    # Базовые типы
    "RoomNumber",
    "BookingId",
    "CustomerId",
    "U64_MAX",
    # Объекты-значения
    "HotelId",
    "Price",
    "Category",
    "StayPeriod",
    "Person",
    # Разбор
    "parse_unsigned",
    "parse_room_number",
    "parse_booking_id",
    "parse_customer_id",
    "parse_date",
    "format_date",
    # Исключения
    "DomainException",
    "ParseException",
    "EntityNotFoundException",
    "ConflictException",
    "AuthorizationException",
    "UnknownCommandException",
]
