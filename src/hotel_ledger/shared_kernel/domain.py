"""
Основные доменные типы и утилиты общего ядра.

Объекты-значения (идентификатор отеля, цена, категория номера, даты
проживания, персона) неизменяемы, сравниваются по значению и умеют
разбирать себя из текста и форматировать обратно.
"""

import re
from datetime import date
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Общие типы идентификаторов
RoomNumber = int
BookingId = int
CustomerId = int

U64_MAX = 2**64 - 1
U64_MAX_DIGITS = len(str(U64_MAX))

_UNSIGNED = re.compile(r"\+?[0-9]+")
_DIGITS = re.compile(r"[0-9]+")
_DATE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


# Общие исключения
class DomainException(Exception):
    """Базовое исключение для доменных ошибок."""

    pass


class ParseException(DomainException):
    """Некорректный текст значения или неверное число аргументов."""

    pass


class EntityNotFoundException(DomainException):
    """Исключение для не найденных сущностей."""

    pass


class ConflictException(DomainException):
    """Нарушение уникальности или занятость номера."""

    pass


class AuthorizationException(DomainException):
    """Операция над чужим бронированием."""

    pass


class UnknownCommandException(DomainException):
    """Неизвестная команда или цель команды."""

    pass


def parse_unsigned(text: str, what: str = "Число") -> int:
    """Разбирает беззнаковое 64-битное целое (например, номер комнаты)."""
    if not _UNSIGNED.fullmatch(text):
        raise ParseException(f"{what} '{text}' должно быть неотрицательным целым")
    significant = text.lstrip("+").lstrip("0") or "0"
    if len(significant) > U64_MAX_DIGITS or int(significant) > U64_MAX:
        raise ParseException(f"{what} не должно превышать {U64_MAX}")
    return int(significant)


def parse_room_number(text: str) -> RoomNumber:
    return parse_unsigned(text, "Номер комнаты")


def parse_booking_id(text: str) -> BookingId:
    return parse_unsigned(text, "ID бронирования")


def parse_customer_id(text: str) -> CustomerId:
    return parse_unsigned(text, "ID клиента")


def parse_date(text: str) -> date:
    """Разбирает дату в формате YYYY-MM-DD."""
    match = _DATE.fullmatch(text)
    if match is None:
        raise ParseException(f"Дата '{text}' должна иметь формат YYYY-MM-DD")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        raise ParseException(f"Даты '{text}' не существует в календаре")


def format_date(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


class HotelId(BaseModel):
    """
    Идентификатор отеля.
    Положительное число не длиннее пяти цифр, отображается с ведущими нулями.
    """

    model_config = ConfigDict(frozen=True)

    MAX_DIGITS: ClassVar[int] = 5

    value: int = Field(..., gt=0, lt=10**5)

    @classmethod
    def parse(cls, text: str) -> "HotelId":
        number = parse_unsigned(text, "ID отеля")
        if number == 0:
            raise ParseException("ID отеля должен быть ненулевым")
        if len(str(number)) > cls.MAX_DIGITS:
            raise ParseException(
                f"ID отеля {number} не должен превышать {cls.MAX_DIGITS} цифр"
            )
        return cls(value=number)

    def __str__(self) -> str:
        return f"{self.value:0{self.MAX_DIGITS}d}"


class Price(BaseModel):
    """
    Цена в евро.

    Хранится как целое число центов, поэтому умножение на количество ночей
    выполняется точно, без ошибок округления. Целая часть не длиннее
    MAX_BIG_DIGITS цифр (ведущие нули не считаются).
    """

    model_config = ConfigDict(frozen=True)

    UNIT: ClassVar[str] = "€"
    SEPARATOR: ClassVar[str] = "."
    MAX_BIG_DIGITS: ClassVar[int] = 100
    MAX_SMALL_DIGITS: ClassVar[int] = 2
    SMALL_TO_BIG: ClassVar[int] = 10**MAX_SMALL_DIGITS

    cents: int = Field(..., gt=0, description="Сумма в центах")

    @classmethod
    def parse(cls, text: str) -> "Price":
        raw = text[: -len(cls.UNIT)] if text.endswith(cls.UNIT) else text
        parts = raw.split(cls.SEPARATOR)
        if len(parts) > 2:
            raise ParseException("Цена не может содержать несколько десятичных разделителей")

        whole = parts[0]
        small = parts[1] if len(parts) == 2 else ""
        if not _DIGITS.fullmatch(whole) or (small and not _DIGITS.fullmatch(small)):
            raise ParseException(f"Некорректная цена '{text}'")

        whole = whole.lstrip("0") or "0"
        if len(whole) > cls.MAX_BIG_DIGITS:
            raise ParseException(
                f"Целая часть цены не должна превышать {cls.MAX_BIG_DIGITS} цифр"
            )

        if len(small) > cls.MAX_SMALL_DIGITS:
            small, excess = small[: cls.MAX_SMALL_DIGITS], small[cls.MAX_SMALL_DIGITS :]
            if excess.strip("0"):
                raise ParseException(
                    f"Цена имеет точность только {cls.MAX_SMALL_DIGITS} знака после запятой"
                )
        small_cents = int(small.ljust(cls.MAX_SMALL_DIGITS, "0")) if small else 0

        cents = int(whole) * cls.SMALL_TO_BIG + small_cents
        if cents == 0:
            raise ParseException("Цена должна быть ненулевой")
        return cls(cents=cents)

    def __str__(self) -> str:
        big, small = divmod(self.cents, self.SMALL_TO_BIG)
        return f"{big}{self.SEPARATOR}{small:0{self.MAX_SMALL_DIGITS}d}{self.UNIT}"

    def __mul__(self, nights: int) -> "Price":
        if isinstance(nights, bool) or not isinstance(nights, int):
            return NotImplemented
        if nights <= 0:
            raise ValueError("Количество ночей должно быть положительным")
        return Price(cents=self.cents * nights)

    __rmul__ = __mul__


class Category(str, Enum):
    """Категории номеров в отеле."""

    SINGLE = "Single"
    DOUBLE = "Double"
    SUITE = "Suite"

    @classmethod
    def parse(cls, text: str) -> "Category":
        try:
            return cls(text)
        except ValueError:
            raise ParseException(f"Неизвестная категория '{text}'")

    def __str__(self) -> str:
        return self.value


class StayPeriod(BaseModel):
    """
    Период проживания [start, end).
    Дата выезда не входит в период.
    """

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def end_after_start(self) -> "StayPeriod":
        if self.end <= self.start:
            raise ValueError("Дата выезда должна быть позже даты заезда")
        return self

    @classmethod
    def between(cls, start: date, end: date) -> "StayPeriod":
        """Создает период, сообщая об ошибке как об ошибке разбора."""
        if end <= start:
            raise ParseException(
                f"Дата выезда {format_date(end)} должна быть позже даты заезда {format_date(start)}"
            )
        return cls(start=start, end=end)

    def __contains__(self, item: date) -> bool:
        if not isinstance(item, date):
            return False
        return self.start <= item < self.end

    @property
    def nights(self) -> int:
        """Количество ночей в периоде."""
        return (self.end - self.start).days

    def __str__(self) -> str:
        return f"{format_date(self.start)} {format_date(self.end)}"


class Person(BaseModel):
    """Имя и фамилия клиента, ключ для поиска его идентификатора."""

    model_config = ConfigDict(frozen=True)

    forename: str
    surname: str
