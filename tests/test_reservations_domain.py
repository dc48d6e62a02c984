"""
Тесты для доменной модели журнала отелей.
Проверяют жизненный цикл отелей, номеров и бронирований, проверку
занятости, выдачу идентификаторов клиентов и отмену бронирований.
"""

import io

import pytest

from hotel_ledger.reservations.domain import Booking, HotelLedger, Room
from hotel_ledger.reservations.infrastructure import ConsoleLogger
from hotel_ledger.shared_kernel import (
    AuthorizationException,
    Category,
    ConflictException,
    EntityNotFoundException,
    HotelId,
    Person,
    Price,
)

HOTEL = HotelId(value=1)
ADA = Person(forename="Ada", surname="Lovelace")
ALAN = Person(forename="Alan", surname="Turing")


class TestHotelsAndRooms:
    """Тесты для создания и удаления отелей и номеров."""

    def test_add_hotel_twice_fails(self, ledger: HotelLedger):
        ledger.add_hotel(HOTEL, "Berlin")
        with pytest.raises(ConflictException, match="уже используется"):
            ledger.add_hotel(HOTEL, "Paris")

    def test_remove_unknown_hotel_fails(self, ledger: HotelLedger):
        with pytest.raises(EntityNotFoundException, match="не существует"):
            ledger.remove_hotel(HOTEL)

    def test_remove_then_re_add_hotel(self, ledger: HotelLedger):
        ledger.add_hotel(HOTEL, "Berlin")
        ledger.remove_hotel(HOTEL)
        ledger.add_hotel(HOTEL, "Berlin")
        assert list(ledger.list_rooms()) == []

    def test_add_room_requires_hotel(self, ledger: HotelLedger):
        with pytest.raises(EntityNotFoundException):
            ledger.add_room(HOTEL, 101, Category.SINGLE, Price(cents=100))

    def test_room_numbers_unique_within_hotel(self, berlin_ledger: HotelLedger):
        with pytest.raises(ConflictException, match="уже существует"):
            berlin_ledger.add_room(HOTEL, 101, Category.SUITE, Price(cents=100))

    def test_same_room_number_in_different_hotels(self, berlin_ledger: HotelLedger):
        other = HotelId(value=2)
        berlin_ledger.add_hotel(other, "Berlin")
        berlin_ledger.add_room(other, 101, Category.SINGLE, Price(cents=100))
        numbers = sorted(
            (hotel_id.value, room.number) for hotel_id, room in berlin_ledger.list_rooms()
        )
        assert numbers == [(1, 101), (1, 102), (2, 101)]

    def test_remove_room(self, berlin_ledger: HotelLedger):
        berlin_ledger.remove_room(HOTEL, 101)
        assert [room.number for _, room in berlin_ledger.list_rooms()] == [102]
        with pytest.raises(EntityNotFoundException):
            berlin_ledger.remove_room(HOTEL, 101)

    def test_remove_room_of_unknown_hotel(self, ledger: HotelLedger):
        with pytest.raises(EntityNotFoundException, match="Отель"):
            ledger.remove_room(HOTEL, 101)

    def test_remove_hotel_discards_bookings(
        self, berlin_ledger: HotelLedger, make_period
    ):
        berlin_ledger.book(HOTEL, 101, make_period("2024-01-01", "2024-01-03"), 1)
        berlin_ledger.remove_hotel(HOTEL)
        assert list(berlin_ledger.list_bookings()) == []
        assert list(berlin_ledger.list_rooms()) == []


class TestOccupancy:
    """Тесты для проверки занятости номера."""

    def test_adjacent_bookings_succeed(self, berlin_ledger: HotelLedger, make_period):
        first = berlin_ledger.book(HOTEL, 101, make_period("2024-01-01", "2024-01-03"), 1)
        second = berlin_ledger.book(HOTEL, 101, make_period("2024-01-03", "2024-01-05"), 1)
        assert (first, second) == (1, 2)

    def test_disjoint_bookings_succeed(self, berlin_ledger: HotelLedger, make_period):
        berlin_ledger.book(HOTEL, 101, make_period("2024-01-10", "2024-01-12"), 1)
        berlin_ledger.book(HOTEL, 101, make_period("2024-01-01", "2024-01-03"), 1)
        assert len(list(berlin_ledger.list_bookings())) == 2

    @pytest.mark.parametrize(
        "start, end",
        [
            ("2024-01-01", "2024-01-03"),  # Совпадает полностью
            ("2024-01-02", "2024-01-06"),  # Заезд внутри
            ("2023-12-30", "2024-01-02"),  # Выезд внутри
            ("2023-12-30", "2024-01-01"),  # Выезд в день чужого заезда
        ],
    )
    def test_endpoint_inside_existing_booking_rejected(
        self, berlin_ledger: HotelLedger, make_period, start, end
    ):
        berlin_ledger.book(HOTEL, 101, make_period("2024-01-01", "2024-01-03"), 1)
        with pytest.raises(ConflictException, match="уже занят"):
            berlin_ledger.book(HOTEL, 101, make_period(start, end), 2)

    def test_enclosing_booking_is_not_a_conflict(
        self, berlin_ledger: HotelLedger, make_period
    ):
        """
        Проверяются только даты заезда и выезда нового периода.
        Период, целиком накрывающий существующее бронирование, принимается.
        """
        berlin_ledger.book(HOTEL, 101, make_period("2024-01-03", "2024-01-05"), 1)
        booking_id = berlin_ledger.book(
            HOTEL, 101, make_period("2024-01-01", "2024-01-10"), 2
        )
        assert booking_id == 2

    def test_conflict_leaves_room_unchanged(self, berlin_ledger: HotelLedger, make_period):
        berlin_ledger.book(HOTEL, 101, make_period("2024-01-01", "2024-01-03"), 1)
        with pytest.raises(ConflictException):
            berlin_ledger.book(HOTEL, 101, make_period("2024-01-02", "2024-01-04"), 1)
        assert [b.id for b in berlin_ledger.list_bookings()] == [1]

    def test_room_is_occupied(self, make_period):
        room = Room(number=1, category=Category.SUITE, price=Price(cents=100))
        room.bookings.append(
            Booking(id=1, customer_id=1, period=make_period("2024-05-01", "2024-05-04"))
        )
        assert room.is_occupied(make_period("2024-05-03", "2024-05-08"))
        assert not room.is_occupied(make_period("2024-05-04", "2024-05-08"))

    def test_book_unknown_room(self, berlin_ledger: HotelLedger, make_period):
        with pytest.raises(EntityNotFoundException, match="Номер 999"):
            berlin_ledger.book(HOTEL, 999, make_period("2024-01-01", "2024-01-02"), 1)
        with pytest.raises(EntityNotFoundException, match="Отель"):
            berlin_ledger.book(
                HotelId(value=7), 101, make_period("2024-01-01", "2024-01-02"), 1
            )


class TestAvailability:
    """Тесты для поиска свободных номеров."""

    def test_filters_by_city_and_category(self, berlin_ledger: HotelLedger, make_period):
        paris = HotelId(value=2)
        berlin_ledger.add_hotel(paris, "Paris")
        berlin_ledger.add_room(paris, 1, Category.SINGLE, Price(cents=100))

        found = list(
            berlin_ledger.available(
                "Berlin", Category.SINGLE, make_period("2024-01-01", "2024-01-02")
            )
        )
        assert [(hotel_id, room.number) for hotel_id, room in found] == [(HOTEL, 101)]

    def test_city_match_is_exact(self, berlin_ledger: HotelLedger, make_period):
        period = make_period("2024-01-01", "2024-01-02")
        assert list(berlin_ledger.available("berlin", Category.SINGLE, period)) == []
        assert list(berlin_ledger.available("Berl", Category.SINGLE, period)) == []

    def test_booked_room_is_excluded(self, berlin_ledger: HotelLedger, make_period):
        berlin_ledger.book(HOTEL, 101, make_period("2024-01-01", "2024-01-03"), 1)
        period = make_period("2024-01-02", "2024-01-04")
        assert list(berlin_ledger.available("Berlin", Category.SINGLE, period)) == []


class TestCustomersAndCancellation:
    """Тесты для клиентов и отмены бронирований."""

    def test_same_person_same_id(self, ledger: HotelLedger):
        assert ledger.get_or_create_customer(ADA) == 1
        assert ledger.get_or_create_customer(
            Person(forename="Ada", surname="Lovelace")
        ) == 1

    def test_new_person_gets_greater_id(self, ledger: HotelLedger):
        ada_id = ledger.get_or_create_customer(ADA)
        alan_id = ledger.get_or_create_customer(ALAN)
        assert alan_id > ada_id

    def test_cancel_wrong_customer_keeps_booking(
        self, berlin_ledger: HotelLedger, make_period
    ):
        customer = berlin_ledger.get_or_create_customer(ADA)
        booking_id = berlin_ledger.book(
            HOTEL, 101, make_period("2024-01-01", "2024-01-03"), customer
        )
        with pytest.raises(AuthorizationException, match="не принадлежит"):
            berlin_ledger.cancel(booking_id, customer + 1)
        assert [b.id for b in berlin_ledger.list_bookings()] == [booking_id]

    def test_cancel_removes_booking(self, berlin_ledger: HotelLedger, make_period):
        booking_id = berlin_ledger.book(
            HOTEL, 101, make_period("2024-01-01", "2024-01-03"), 1
        )
        berlin_ledger.cancel(booking_id, 1)
        assert list(berlin_ledger.list_bookings()) == []
        with pytest.raises(EntityNotFoundException, match="не найдено"):
            berlin_ledger.cancel(booking_id, 1)

    def test_booking_ids_are_never_reused(self, berlin_ledger: HotelLedger, make_period):
        first = berlin_ledger.book(HOTEL, 101, make_period("2024-01-01", "2024-01-03"), 1)
        berlin_ledger.cancel(first, 1)
        second = berlin_ledger.book(HOTEL, 101, make_period("2024-01-01", "2024-01-03"), 1)
        assert second == first + 1

    def test_cancelled_period_can_be_booked_again(
        self, berlin_ledger: HotelLedger, make_period
    ):
        booking_id = berlin_ledger.book(
            HOTEL, 101, make_period("2024-01-01", "2024-01-03"), 1
        )
        berlin_ledger.cancel(booking_id, 1)
        berlin_ledger.book(HOTEL, 101, make_period("2024-01-02", "2024-01-04"), 2)


class TestLogging:
    """Журнал сообщает об изменениях через логгер."""

    def test_mutations_are_logged(self, make_period):
        stream = io.StringIO()
        ledger = HotelLedger(logger=ConsoleLogger(level="INFO", stream=stream))
        ledger.add_hotel(HOTEL, "Berlin")
        ledger.add_room(HOTEL, 101, Category.SINGLE, Price(cents=5000))
        ledger.book(HOTEL, 101, make_period("2024-01-01", "2024-01-02"), 1)

        log = stream.getvalue()
        assert "[INFO] Отель добавлен" in log
        assert "[INFO] Номер добавлен" in log
        assert "[INFO] Бронирование создано" in log
        assert '"city": "Berlin"' in log

    def test_level_filtering(self):
        stream = io.StringIO()
        logger = ConsoleLogger(level="WARNING", stream=stream)
        logger.info("скрыто")
        logger.debug("скрыто")
        logger.error("видно")
        assert stream.getvalue() == "[ERROR] видно\n"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError, match="Неизвестный уровень"):
            ConsoleLogger(level="TRACE")
