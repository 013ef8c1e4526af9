"""
Логирование на базе loguru.
"""

import sys
from typing import Any, Optional, TextIO, Union, Callable

from loguru import logger as loguru_logger

from ..application import interfaces as ports

LOG_FORMAT = " | ".join(
    (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>",
        "<level>{level:<8}</level>",
        "<cyan>{extra[component]}</cyan>",
        "{message}",
        "<dim>{extra}</dim>",
    )
)


def configure_logging(
    level: str = "INFO",
    sink: Optional[Union[TextIO, Callable[[str], Any]]] = None,
) -> None:
    """Заменяет обработчики loguru одним потоком с нашим форматом."""
    loguru_logger.remove()
    loguru_logger.configure(extra={"component": "venue_reservation"})
    loguru_logger.add(sink or sys.stderr, level=level.upper(), format=LOG_FORMAT)


class LoguruLogger(ports.ILogger):
    """Адаптер loguru к порту ILogger.

    Именованные аргументы попадают в extra записи лога.
    """

    def __init__(self, component: str = "venue_reservation"):
        self._logger = loguru_logger.bind(component=component)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, kwargs)

    def _log(self, level: str, message: str, context: dict) -> None:
        exc_info = context.pop("exc_info", False)
        self._logger.bind(**context).opt(exception=exc_info, depth=2).log(
            level, message
        )
