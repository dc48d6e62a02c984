"""
Доменная модель контекста бронирования.

Содержит сущности (отель, номер, бронирование) и агрегат HotelLedger,
который владеет всеми отелями, выдает идентификаторы бронирований и
клиентов и следит за соблюдением инвариантов.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, Field

from ..shared_kernel import (
    AuthorizationException,
    BookingId,
    Category,
    ConflictException,
    CustomerId,
    EntityNotFoundException,
    HotelId,
    Person,
    Price,
    RoomNumber,
    StayPeriod,
)
from . import interfaces as ports
from .infrastructure import NullLogger


class Booking(BaseModel):
    """Бронирование номера."""

    id: BookingId
    customer_id: CustomerId
    period: StayPeriod


class Room(BaseModel):
    """Номер в отеле."""

    number: RoomNumber
    category: Category
    price: Price  # Цена за ночь
    bookings: List[Booking] = Field(default_factory=list)

    def is_occupied(self, period: StayPeriod) -> bool:
        """
        Проверяет, занят ли номер на указанный период.

        Номер считается занятым, если дата заезда или дата выезда попадает
        внутрь одного из существующих бронирований. Пересечение периодов
        целиком не проверяется: период, полностью накрывающий чужое
        бронирование, конфликтом не считается.
        """
        return any(
            period.start in booking.period or period.end in booking.period
            for booking in self.bookings
        )

    def find_booking(self, booking_id: BookingId) -> Optional[int]:
        """Возвращает позицию бронирования в списке или None."""
        for index, booking in enumerate(self.bookings):
            if booking.id == booking_id:
                return index
        return None


class Hotel(BaseModel):
    """Отель."""

    id: HotelId
    city: str
    rooms: Dict[RoomNumber, Room] = Field(default_factory=dict)


class HotelLedger:
    """
    Агрегат 'Журнал отелей'.

    Хранит все отели, их номера и бронирования, а также соответствие
    клиентов (имя и фамилия) их идентификаторам. Счетчики бронирований и
    клиентов монотонно растут и никогда не переиспользуются.
    """

    def __init__(self, logger: Optional[ports.ILogger] = None):
        self._hotels: Dict[HotelId, Hotel] = {}
        self._customers: Dict[Person, CustomerId] = {}
        self._next_booking_id: BookingId = 1
        self._next_customer_id: CustomerId = 1
        self._logger = logger or NullLogger()

    def _get_hotel(self, hotel_id: HotelId) -> Hotel:
        hotel = self._hotels.get(hotel_id)
        if hotel is None:
            raise EntityNotFoundException(f"Отель с ID {hotel_id} не существует")
        return hotel

    def _get_room(self, hotel_id: HotelId, room_number: RoomNumber) -> Room:
        room = self._get_hotel(hotel_id).rooms.get(room_number)
        if room is None:
            raise EntityNotFoundException(
                f"Номер {room_number} в отеле {hotel_id} не существует"
            )
        return room

    def add_hotel(self, hotel_id: HotelId, city: str) -> None:
        """Создает пустой отель."""
        if hotel_id in self._hotels:
            raise ConflictException(f"ID отеля {hotel_id} уже используется")
        self._hotels[hotel_id] = Hotel(id=hotel_id, city=city)
        self._logger.info("Отель добавлен", hotel_id=str(hotel_id), city=city)

    def add_room(
        self,
        hotel_id: HotelId,
        room_number: RoomNumber,
        category: Category,
        price: Price,
    ) -> None:
        """Добавляет в отель номер без бронирований."""
        hotel = self._get_hotel(hotel_id)
        if room_number in hotel.rooms:
            raise ConflictException(
                f"Номер {room_number} уже существует в отеле {hotel_id}"
            )
        hotel.rooms[room_number] = Room(
            number=room_number, category=category, price=price
        )
        self._logger.info(
            "Номер добавлен",
            hotel_id=str(hotel_id),
            room=room_number,
            category=str(category),
            price=str(price),
        )

    def remove_room(self, hotel_id: HotelId, room_number: RoomNumber) -> None:
        """Удаляет номер вместе с его бронированиями."""
        self._get_room(hotel_id, room_number)
        del self._hotels[hotel_id].rooms[room_number]
        self._logger.info("Номер удален", hotel_id=str(hotel_id), room=room_number)

    def remove_hotel(self, hotel_id: HotelId) -> None:
        """Удаляет отель со всеми номерами и бронированиями."""
        self._get_hotel(hotel_id)
        del self._hotels[hotel_id]
        self._logger.info("Отель удален", hotel_id=str(hotel_id))

    def list_rooms(self) -> Iterator[Tuple[HotelId, Room]]:
        for hotel_id, hotel in self._hotels.items():
            for room in hotel.rooms.values():
                yield hotel_id, room

    def list_bookings(self) -> Iterator[Booking]:
        for hotel in self._hotels.values():
            for room in hotel.rooms.values():
                yield from room.bookings

    def available(
        self, city: str, category: Category, period: StayPeriod
    ) -> Iterator[Tuple[HotelId, Room]]:
        """Находит свободные номера нужной категории в городе."""
        for hotel_id, hotel in self._hotels.items():
            if hotel.city != city:
                continue
            for room in hotel.rooms.values():
                if room.category == category and not room.is_occupied(period):
                    yield hotel_id, room

    def book(
        self,
        hotel_id: HotelId,
        room_number: RoomNumber,
        period: StayPeriod,
        customer_id: CustomerId,
    ) -> BookingId:
        """Бронирует номер и возвращает ID нового бронирования."""
        room = self._get_room(hotel_id, room_number)
        if room.is_occupied(period):
            raise ConflictException("Номер уже занят в указанный период")

        booking_id = self._next_booking_id
        self._next_booking_id += 1
        room.bookings.append(
            Booking(id=booking_id, customer_id=customer_id, period=period)
        )
        self._logger.info(
            "Бронирование создано",
            booking_id=booking_id,
            customer_id=customer_id,
            hotel_id=str(hotel_id),
            room=room_number,
            period=str(period),
        )
        return booking_id

    def get_or_create_customer(self, person: Person) -> CustomerId:
        """Возвращает ID клиента, регистрируя его при первом обращении."""
        customer_id = self._customers.get(person)
        if customer_id is not None:
            return customer_id

        customer_id = self._next_customer_id
        self._next_customer_id += 1
        self._customers[person] = customer_id
        self._logger.info(
            "Клиент зарегистрирован",
            customer_id=customer_id,
            forename=person.forename,
            surname=person.surname,
        )
        return customer_id

    def cancel(self, booking_id: BookingId, customer_id: CustomerId) -> None:
        """Отменяет бронирование, принадлежащее клиенту."""
        for hotel in self._hotels.values():
            for room in hotel.rooms.values():
                index = room.find_booking(booking_id)
                if index is None:
                    continue
                if room.bookings[index].customer_id != customer_id:
                    raise AuthorizationException(
                        f"Бронирование {booking_id} не принадлежит клиенту {customer_id}"
                    )
                room.bookings.pop(index)
                self._logger.info(
                    "Бронирование отменено",
                    booking_id=booking_id,
                    customer_id=customer_id,
                )
                return
        raise EntityNotFoundException(f"Бронирование с ID {booking_id} не найдено")
