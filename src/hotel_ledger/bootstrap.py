from typing import Any, Dict, Optional

from .config import LedgerSettings, get_settings
from .reservations.application import CommandInterpreter
from .reservations.domain import HotelLedger
from .reservations.infrastructure import ConsoleLogger, NullLogger


def bootstrap_app(settings: Optional[LedgerSettings] = None) -> Dict[str, Any]:
    """Создает и настраивает все компоненты приложения."""
    settings = settings or get_settings()

    # 1. Логгер общий для журнала и интерпретатора
    if settings.log_enabled:
        logger = ConsoleLogger(level=settings.log_level)
    else:
        logger = NullLogger()

    # 2. Пустой журнал отелей
    ledger = HotelLedger(logger=logger)

    # 3. Интерпретатор команд поверх журнала
    interpreter = CommandInterpreter(
        ledger, logger=logger, error_prefix=settings.error_prefix
    )

    return {
        "settings": settings,
        "logger": logger,
        "ledger": ledger,
        "interpreter": interpreter,
    }
