"""
Общие фикстуры для тестов журнала отелей.
"""
from datetime import date

import pytest

from hotel_ledger.reservations.application import CommandInterpreter
from hotel_ledger.reservations.domain import HotelLedger
from hotel_ledger.shared_kernel import Category, HotelId, Price, StayPeriod


@pytest.fixture
def ledger() -> HotelLedger:
    return HotelLedger()


@pytest.fixture
def berlin_ledger(ledger: HotelLedger) -> HotelLedger:
    """Журнал с одним отелем в Берлине и двумя номерами."""
    hotel_id = HotelId(value=1)
    ledger.add_hotel(hotel_id, "Berlin")
    ledger.add_room(hotel_id, 101, Category.SINGLE, Price(cents=5000))
    ledger.add_room(hotel_id, 102, Category.DOUBLE, Price(cents=8000))
    return ledger


@pytest.fixture
def interpreter(ledger: HotelLedger) -> CommandInterpreter:
    return CommandInterpreter(ledger)


@pytest.fixture
def run(interpreter: CommandInterpreter):
    """Выполняет команды по очереди и возвращает вывод последней."""

    def _run(*lines: str) -> str:
        output = ""
        for line in lines:
            output = interpreter.handle_command(line).command_output
        return output

    return _run


@pytest.fixture
def make_period():
    """Строит период проживания из строк ISO."""

    def _make(start: str, end: str) -> StayPeriod:
        return StayPeriod(start=date.fromisoformat(start), end=date.fromisoformat(end))

    return _make
