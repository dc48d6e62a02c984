"""
Граница для внешней среды: жизненный цикл интерпретатора через
непрозрачные дескрипторы (создать, выполнить команду, уничтожить).

Сам интерпретатор однопоточный, поэтому вызовы по одному дескриптору
сериализуются здесь, на границе.
"""

import itertools
import threading
from typing import Callable, Dict, Optional, Tuple

from .bootstrap import bootstrap_app
from .reservations.application import CommandInterpreter, CommandResult

InterpreterFactory = Callable[[], CommandInterpreter]


class HandlerClosedException(Exception):
    """Дескриптор уже уничтожен или никогда не существовал."""

    pass


def _default_factory() -> CommandInterpreter:
    return bootstrap_app()["interpreter"]


class HandlerRegistry:
    """Реестр интерпретаторов, доступных по целочисленным дескрипторам."""

    def __init__(self, factory: Optional[InterpreterFactory] = None):
        self._factory = factory or _default_factory
        self._handles: Dict[int, Tuple[threading.Lock, CommandInterpreter]] = {}
        self._ids = itertools.count(1)
        self._guard = threading.Lock()

    def create(self) -> int:
        """Создает новый интерпретатор и возвращает его дескриптор."""
        interpreter = self._factory()
        with self._guard:
            handle = next(self._ids)
            self._handles[handle] = (threading.Lock(), interpreter)
        return handle

    def destroy(self, handle: int) -> None:
        """Освобождает интерпретатор. Повторный вызов - ошибка."""
        with self._guard:
            entry = self._handles.pop(handle, None)
        if entry is None:
            raise HandlerClosedException(f"Дескриптор {handle} уже закрыт")
        lock, _ = entry
        # Дожидаемся завершения команды, выполняющейся в этот момент
        with lock:
            pass

    def handle(self, handle: int, line: str) -> CommandResult:
        """Выполняет одну строку команды на интерпретаторе дескриптора."""
        with self._guard:
            entry = self._handles.get(handle)
        if entry is None:
            raise HandlerClosedException(f"Дескриптор {handle} уже закрыт")
        lock, interpreter = entry
        with lock:
            return interpreter.handle_command(line)

    def __len__(self) -> int:
        return len(self._handles)


class CommandHandler:
    """
    Закрываемая обертка над одним дескриптором.

    Используется как контекстный менеджер; после close() выполнять
    команды нельзя.
    """

    def __init__(self, registry: Optional[HandlerRegistry] = None):
        self._registry = registry or HandlerRegistry()
        self._handle: Optional[int] = self._registry.create()
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._handle is None

    def handle_command(self, command: str) -> CommandResult:
        with self._lock:
            if self._handle is None:
                raise HandlerClosedException("Обработчик команд уже закрыт")
            return self._registry.handle(self._handle, command)

    def close(self) -> None:
        with self._lock:
            if self._handle is None:
                return
            try:
                self._registry.destroy(self._handle)
            finally:
                self._handle = None

    def __enter__(self) -> "CommandHandler":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Пробрасываем исключение дальше, если оно было
