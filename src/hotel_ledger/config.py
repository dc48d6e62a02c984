from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .reservations.infrastructure import LOG_LEVELS


class LedgerSettings(BaseSettings):
    """Настройки приложения, читаются из переменных окружения HOTEL_LEDGER_*."""

    model_config = SettingsConfigDict(env_prefix="HOTEL_LEDGER_", case_sensitive=False)

    log_enabled: bool = True
    log_level: str = Field("WARNING", description="Минимальный уровень логирования")
    error_prefix: str = "Error: "

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Уровень логирования должен быть одним из: {', '.join(LOG_LEVELS)}"
            )
        return v.upper()


@lru_cache()
def get_settings() -> LedgerSettings:
    return LedgerSettings()
