"""
Инфраструктурный слой контекста бронирования.

Содержит реализации портов, зависящие от окружения (вывод в консоль).
"""
import json
import sys
from typing import Any, Dict, Optional, TextIO

from . import interfaces as ports

LOG_LEVELS: Dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}


class ConsoleLogger(ports.ILogger):
    """
    Простая реализация логгера, выводящая сообщения в консоль.

    Пишет в stderr, чтобы не смешиваться с выводом команд.
    """

    def __init__(self, level: str = "WARNING", stream: Optional[TextIO] = None):
        if level.upper() not in LOG_LEVELS:
            raise ValueError(f"Неизвестный уровень логирования: {level}")
        self._threshold = LOG_LEVELS[level.upper()]
        self._stream = stream

    def _write(self, level: str, message: str, context: Dict[str, Any]) -> None:
        if LOG_LEVELS[level] < self._threshold:
            return
        stream = self._stream or sys.stderr
        print(f"[{level}] {message}", file=stream, flush=True)
        if context:
            print(
                "  Context:",
                json.dumps(context, default=str, indent=2, ensure_ascii=False),
                file=stream,
                flush=True,
            )

    def info(self, message: str, **kwargs) -> None:
        self._write("INFO", message, kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._write("ERROR", message, kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._write("WARNING", message, kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self._write("DEBUG", message, kwargs)


class NullLogger(ports.ILogger):
    """Логгер, который ничего не выводит."""

    def info(self, message: str, **kwargs) -> None:
        pass

    def error(self, message: str, **kwargs) -> None:
        pass

    def warning(self, message: str, **kwargs) -> None:
        pass

    def debug(self, message: str, **kwargs) -> None:
        pass
