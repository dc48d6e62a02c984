"""
Модуль контекста бронирования (Reservations Context).

Отвечает за ведение журнала отелей, включая:
- Создание и удаление отелей и номеров
- Поиск свободных номеров и расчет стоимости
- Бронирование и отмену бронирований
- Интерпретацию текстовых команд оператора
"""

from . import application, domain, infrastructure, interfaces

__all__ = [
    "domain",
    "application",
    "infrastructure",
    "interfaces",
]
