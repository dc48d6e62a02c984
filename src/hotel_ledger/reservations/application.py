"""
Прикладной слой контекста бронирования.

Интерпретатор команд: разбивает строку на слова, находит команду в
статической таблице, проверяет количество аргументов, разбирает их в
объекты-значения, вызывает журнал отелей и форматирует результат.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from ..shared_kernel import (
    BookingId,
    Category,
    CustomerId,
    DomainException,
    HotelId,
    ParseException,
    Person,
    Price,
    RoomNumber,
    StayPeriod,
    UnknownCommandException,
    parse_booking_id,
    parse_customer_id,
    parse_date,
    parse_room_number,
)
from . import interfaces as ports
from .infrastructure import NullLogger

OK = "OK"
ERROR_PREFIX = "Error: "

# DTO для исходящих данных


class CommandResult(BaseModel):
    """Результат выполнения одной команды."""

    command_output: str
    is_error: bool = False
    is_quitting: bool = False


# Обработчики команд


def add_hotel(ledger: ports.ILedger, hotel_id: HotelId, city: str) -> str:
    ledger.add_hotel(hotel_id, city)
    return OK


def add_room(
    ledger: ports.ILedger,
    hotel_id: HotelId,
    room_number: RoomNumber,
    category: Category,
    price: Price,
) -> str:
    ledger.add_room(hotel_id, room_number, category, price)
    return OK


def remove_hotel(ledger: ports.ILedger, hotel_id: HotelId) -> str:
    ledger.remove_hotel(hotel_id)
    return OK


def remove_room(
    ledger: ports.ILedger, hotel_id: HotelId, room_number: RoomNumber
) -> str:
    ledger.remove_room(hotel_id, room_number)
    return OK


def list_rooms(ledger: ports.ILedger) -> str:
    """Все номера, отсортированные по отелю и номеру комнаты."""
    rooms = sorted(
        ledger.list_rooms(), key=lambda entry: (entry[0].value, entry[1].number)
    )
    return "\n".join(
        f"{hotel_id} {room.number} {room.category} {room.price}"
        for hotel_id, room in rooms
    )


def list_bookings(ledger: ports.ILedger) -> str:
    """Все бронирования, отсортированные по ID."""
    bookings = sorted(ledger.list_bookings(), key=lambda booking: booking.id)
    return "\n".join(
        f"{booking.id} {booking.customer_id} {booking.period}" for booking in bookings
    )


def find_cheapest(
    ledger: ports.ILedger, city: str, category: Category, start: date, end: date
) -> str:
    """
    Самый дешевый свободный номер и полная стоимость проживания.

    При равной цене выигрывает меньший ID отеля, затем меньший номер комнаты.
    Если свободных номеров нет, вывод пустой.
    """
    period = StayPeriod.between(start, end)
    candidates = list(ledger.available(city, category, period))
    if not candidates:
        return ""

    hotel_id, room = min(
        candidates,
        key=lambda entry: (entry[1].price.cents, entry[0].value, entry[1].number),
    )
    total = room.price * period.nights
    return f"{hotel_id} {room.number} {total}"


def find_available(
    ledger: ports.ILedger, city: str, category: Category, start: date, end: date
) -> str:
    """Все свободные номера с ценой за ночь."""
    period = StayPeriod.between(start, end)
    rooms = sorted(
        ledger.available(city, category, period),
        key=lambda entry: (entry[0].value, entry[1].number),
    )
    return "\n".join(
        f"{hotel_id} {room.number} {room.price}" for hotel_id, room in rooms
    )


def book(
    ledger: ports.ILedger,
    hotel_id: HotelId,
    room_number: RoomNumber,
    start: date,
    end: date,
    forename: str,
    surname: str,
) -> str:
    period = StayPeriod.between(start, end)
    customer_id = ledger.get_or_create_customer(
        Person(forename=forename, surname=surname)
    )
    booking_id = ledger.book(hotel_id, room_number, period, customer_id)
    return f"{booking_id} {customer_id}"


def cancel(
    ledger: ports.ILedger, booking_id: BookingId, customer_id: CustomerId
) -> str:
    ledger.cancel(booking_id, customer_id)
    return OK


def quit_(ledger: ports.ILedger) -> str:
    return ""


# Таблица команд

ArgParser = Callable[[str], Any]


@dataclass(frozen=True)
class CommandSpec:
    """Описание команды: типы позиционных аргументов и обработчик."""

    arg_types: Tuple[ArgParser, ...]
    handler: Callable[..., str]
    quits: bool = False

    @property
    def arity(self) -> int:
        return len(self.arg_types)


COMMANDS: Dict[Tuple[str, Optional[str]], CommandSpec] = {
    ("add", "room"): CommandSpec(
        (HotelId.parse, parse_room_number, Category.parse, Price.parse), add_room
    ),
    ("add", "hotel"): CommandSpec((HotelId.parse, str), add_hotel),
    ("remove", "room"): CommandSpec((HotelId.parse, parse_room_number), remove_room),
    ("remove", "hotel"): CommandSpec((HotelId.parse,), remove_hotel),
    ("find", "cheapest"): CommandSpec(
        (str, Category.parse, parse_date, parse_date), find_cheapest
    ),
    ("find", "available"): CommandSpec(
        (str, Category.parse, parse_date, parse_date), find_available
    ),
    ("list", "rooms"): CommandSpec((), list_rooms),
    ("list", "bookings"): CommandSpec((), list_bookings),
    ("book", None): CommandSpec(
        (HotelId.parse, parse_room_number, parse_date, parse_date, str, str), book
    ),
    ("cancel", None): CommandSpec((parse_booking_id, parse_customer_id), cancel),
    ("quit", None): CommandSpec((), quit_, quits=True),
}


def targets_of(command: str) -> List[str]:
    """Цели, которые допускает двухуровневая команда, в порядке таблицы."""
    return [target for name, target in COMMANDS if name == command and target]


def resolve(tokens: Sequence[str]) -> Tuple[CommandSpec, Sequence[str]]:
    """Находит описание команды и возвращает оставшиеся аргументы."""
    if not tokens:
        raise UnknownCommandException("Введите команду")

    command, args = tokens[0], tokens[1:]
    targets = targets_of(command)
    if not targets:
        spec = COMMANDS.get((command, None))
        if spec is None:
            raise UnknownCommandException(f"Неизвестная команда '{command}'")
        return spec, args

    expected = ", ".join(targets)
    if not args:
        raise UnknownCommandException(
            f"Не указана цель, ожидается одна из: {expected}"
        )
    target, args = args[0], args[1:]
    spec = COMMANDS.get((command, target))
    if spec is None:
        raise UnknownCommandException(
            f"Неизвестная цель '{target}', ожидается одна из: {expected}"
        )
    return spec, args


def parse_arguments(spec: CommandSpec, args: Sequence[str]) -> List[Any]:
    """Проверяет количество аргументов и разбирает их по порядку."""
    if len(args) != spec.arity:
        raise ParseException(
            f"Ожидалось аргументов: {spec.arity}, получено: {len(args)}"
        )
    return [parse(arg) for parse, arg in zip(spec.arg_types, args)]


# Сервисы приложения


class CommandInterpreter:
    """
    Сервис приложения, переводящий текстовые команды в вызовы журнала.

    Каждая строка применяется целиком или отклоняется целиком. Ошибка
    любой команды не мешает выполнению следующих.
    """

    def __init__(
        self,
        ledger: ports.ILedger,
        logger: Optional[ports.ILogger] = None,
        error_prefix: str = ERROR_PREFIX,
    ):
        """Инициализирует сервис."""
        self._ledger = ledger
        self._logger = logger or NullLogger()
        self._error_prefix = error_prefix

    @property
    def ledger(self) -> ports.ILedger:
        return self._ledger

    def handle_command(self, line: str) -> CommandResult:
        """Выполняет одну строку команды."""
        try:
            spec, args = resolve(line.split())
            values = parse_arguments(spec, args)
            self._logger.debug(
                "Выполнение команды", handler=spec.handler.__name__, args=list(args)
            )
            output = spec.handler(self._ledger, *values)
        except DomainException as e:
            self._logger.info("Команда отклонена", command=line, reason=str(e))
            return CommandResult(
                command_output=f"{self._error_prefix}{e}", is_error=True
            )

        return CommandResult(command_output=output, is_quitting=spec.quits)
