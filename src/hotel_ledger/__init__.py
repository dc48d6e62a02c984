"""
Журнал бронирований отелей.

Отели содержат номера, номера накапливают бронирования клиентов, а
небольшой командный язык позволяет оператору управлять всем этим.
"""

__version__ = "0.1.0"
