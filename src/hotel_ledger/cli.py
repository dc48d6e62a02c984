"""Точка входа CLI: читает команды из stdin, по одной на строку."""

from typing import Optional

import click

from hotel_ledger import __version__
from hotel_ledger.bridge import CommandHandler, HandlerRegistry
from hotel_ledger.bootstrap import bootstrap_app
from hotel_ledger.config import get_settings
from hotel_ledger.reservations.infrastructure import LOG_LEVELS


@click.command()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(list(LOG_LEVELS), case_sensitive=False),
    default=None,
    help="Минимальный уровень логирования (по умолчанию из HOTEL_LEDGER_LOG_LEVEL).",
)
def main(log_level: Optional[str]) -> None:
    """Журнал бронирований отелей.

    Успешный вывод команд печатается в stdout, ошибки - в stderr.
    Работа завершается командой quit или концом ввода.
    """
    settings = get_settings()
    if log_level is not None:
        settings = settings.model_copy(update={"log_level": log_level.upper()})

    registry = HandlerRegistry(lambda: bootstrap_app(settings)["interpreter"])
    stdin = click.get_text_stream("stdin")

    with CommandHandler(registry) as handler:
        for line in stdin:
            result = handler.handle_command(line.rstrip("\r\n"))
            if result.command_output:
                click.echo(result.command_output, err=result.is_error)
            if result.is_quitting:
                break
