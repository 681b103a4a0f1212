"""
Event Publishers - Publicadores de Eventos de Domínio.

Responsável por entregar eventos (após commit do Unit of Work).
Implementações:
- LoggingEventPublisher: Apenas loga (desenvolvimento / modo sync)
- CeleryEventPublisher: Envia para o dispatcher Celery (produção)
- InMemoryEventPublisher: Para testes
- CompositeEventPublisher: Vários destinos
"""

from typing import Callable, Dict, List
import json
import logging

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class LoggingEventPublisher(EventPublisher):
    """
    Publisher que apenas loga eventos.

    Usado em desenvolvimento para visualizar eventos sem
    infraestrutura de mensageria. Handlers locais podem ser
    registrados por tipo de evento.
    """

    def __init__(self, log_level: int = logging.INFO):
        self._log_level = log_level
        self._handlers: Dict[str, List[EventHandler]] = {}

    def publish(self, event: DomainEvent) -> None:
        logger.log(
            self._log_level,
            f"[EVENT] {event.event_type} | "
            f"aggregate={event.aggregate_id} | "
            f"data={json.dumps(event.to_dict(), default=str)}"
        )
        self._dispatch_to_handlers(event)

    def register_handler(self, event_type: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def _dispatch_to_handlers(self, event: DomainEvent) -> None:
        for handler in self._handlers.get(event.event_type, []):
            try:
                handler(event)
            except Exception:
                logger.exception(f"Erro em handler para {event.event_type}")


class CeleryEventPublisher(EventPublisher):
    """
    Publisher que envia eventos para Celery.

    O evento é serializado com to_dict() e roteado pela task
    dispatch_domain_event.
    """

    def __init__(self, also_log: bool = True):
        self._also_log = also_log

    def publish(self, event: DomainEvent) -> None:
        # Importação tardia: handlers dependem do app Celery configurado
        from src.adapters.django_app.events.handlers import dispatch_domain_event

        if self._also_log:
            logger.info(
                f"[EVENT->CELERY] {event.event_type} | "
                f"aggregate={event.aggregate_id}"
            )
        dispatch_domain_event.delay(
            event.event_type,
            json.loads(json.dumps(event.to_dict(), default=str)),
        )


class InMemoryEventPublisher(EventPublisher):
    """
    Publisher em memória para testes.

    Armazena eventos publicados para verificação.
    """

    def __init__(self):
        self._published_events: List[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self._published_events.append(event)

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events.copy()

    def get_events_by_type(self, event_type: str) -> List[DomainEvent]:
        return [e for e in self._published_events if e.event_type == event_type]

    def clear(self) -> None:
        self._published_events.clear()


class CompositeEventPublisher(EventPublisher):
    """
    Publisher que delega para múltiplos publishers.

    Falha em um destino não impede a entrega nos demais.
    """

    def __init__(self, publishers: List[EventPublisher] = None):
        self._publishers = list(publishers or [])

    def add_publisher(self, publisher: EventPublisher) -> None:
        self._publishers.append(publisher)

    def publish(self, event: DomainEvent) -> None:
        for publisher in self._publishers:
            try:
                publisher.publish(event)
            except Exception:
                logger.exception(
                    f"Erro ao publicar em {publisher.__class__.__name__}"
                )


def get_event_publisher(mode: str = "sync") -> EventPublisher:
    """
    Factory para obter publisher apropriado.

    Args:
        mode: "sync" (apenas log) ou "celery" (log + Celery)
    """
    if mode == "celery":
        return CompositeEventPublisher([
            LoggingEventPublisher(log_level=logging.DEBUG),
            CeleryEventPublisher(also_log=True),
        ])
    return LoggingEventPublisher()
