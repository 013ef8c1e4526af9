"""
Шина доменных событий в памяти.
"""

from typing import Callable, Dict, List, Optional, Type

from ..application import interfaces as ports
from ..shared_kernel import DomainEvent
from .logger import LoguruLogger

Handler = Callable[[DomainEvent], None]


class InMemoryEventBus(ports.IEventBus):
    """Синхронная шина событий.

    Обработчики вызываются в порядке подписки. Ошибка в одном обработчике
    логируется и не мешает вызову остальных.
    """

    def __init__(self, logger: Optional[ports.ILogger] = None):
        self._subscribers: Dict[Type[DomainEvent], List[Handler]] = {}
        self._logger = logger or LoguruLogger()

    def publish(self, event: DomainEvent) -> None:
        """Публикует событие."""
        event_type = type(event)
        handlers = list(self._subscribers.get(event_type, []))
        if not handlers:
            self._logger.debug(f"No subscribers for event type {event_type.__name__}")
            return

        self._logger.debug(
            f"Publishing event: {event_type.__name__}", event_id=str(event.event_id)
        )

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                self._logger.error(
                    f"Error in event handler for {event_type.__name__}",
                    error=str(e),
                    event_id=str(event.event_id),
                    exc_info=True,
                )

    def subscribe(self, event_type: Type[DomainEvent], handler: Handler) -> None:
        """Подписывает обработчик на события указанного типа."""
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(handler)
        self._logger.debug(f"Subscribed handler to {event_type.__name__} events")

    def unsubscribe(self, event_type: Type[DomainEvent], handler: Handler) -> bool:
        """Отписывает обработчик. Возвращает False, если он не был подписан."""
        handlers = self._subscribers.get(event_type, [])
        remaining = [h for h in handlers if h != handler]
        if len(remaining) == len(handlers):
            return False
        self._subscribers[event_type] = remaining
        return True

    def subscribers_count(self, event_type: Type[DomainEvent]) -> int:
        return len(self._subscribers.get(event_type, []))
