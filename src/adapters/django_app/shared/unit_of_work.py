"""
Unit of Work - Implementação Django.

Gerencia a fronteira transacional dos comandos, garantindo que
exclusões em lote e escritas múltiplas sejam tudo ou nada.

Responsabilidades:
- Abrir/fechar bloco transaction.atomic()
- Commit/Rollback coordenado
- Publicar eventos somente após commit bem-sucedido

Blocos atomic aninhados viram savepoints, então o UoW funciona tanto
em request (autocommit) quanto dentro da transação de teste do
pytest-django.
"""

from typing import List, Optional
import logging

from django.db import transaction

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher, UnitOfWork

logger = logging.getLogger(__name__)


class DjangoUnitOfWork(UnitOfWork):
    """
    Implementação Django do Unit of Work.

    Example:
        uow = DjangoUnitOfWork(event_publisher=publisher)
        with uow:
            ticket_repo.delete_tickets_by_id([1, 2])
            uow.publish_event(TicketsDeletedEvent(...))
        # Commit automático + eventos publicados

    Example com rollback:
        with uow:
            ticket_repo.add_ticket(ticket)
            raise Exception("Erro!")
        # Rollback automático, eventos descartados
    """

    def __init__(self, event_publisher: Optional[EventPublisher] = None, using: str = None):
        """
        Args:
            event_publisher: Publicador de eventos (log, Celery, etc)
            using: Alias do banco (padrão: default)
        """
        super().__init__()
        self._event_publisher = event_publisher
        self._using = using
        self._atomic = None

    def _begin_transaction(self) -> None:
        if self._atomic is not None:
            raise RuntimeError("Unit of Work já está em uma transação")
        self._atomic = transaction.atomic(using=self._using)
        self._atomic.__enter__()
        logger.debug("Transaction started")

    def commit(self) -> None:
        """
        Ordem: commit no banco → publicação dos eventos → limpeza.

        Se o commit falhar os eventos são descartados e o erro sobe.
        """
        atomic, self._atomic = self._atomic, None
        try:
            if atomic is not None:
                atomic.__exit__(None, None, None)
                logger.debug("Transaction committed")
        except Exception:
            self.clear_events()
            raise

        self._publish_events()

    def rollback(self) -> None:
        atomic, self._atomic = self._atomic, None
        try:
            if atomic is not None:
                transaction.set_rollback(True, using=self._using)
                atomic.__exit__(None, None, None)
                logger.debug("Transaction rolled back")
        finally:
            self.clear_events()

    def _publish_events(self) -> None:
        """
        Entrega eventos ao publisher.

        Falha de publicação não desfaz o commit: é registrada em log.
        """
        events, self._events = self._events, []
        for event in events:
            logger.info(
                f"Publishing event: {event.event_type} "
                f"for aggregate {event.aggregate_id}"
            )
            if self._event_publisher is None:
                continue
            try:
                self._event_publisher.publish(event)
            except Exception:
                logger.exception(f"Failed to publish event {event.event_id}")

    @property
    def in_transaction(self) -> bool:
        return self._atomic is not None


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of Work em memória para testes.

    Não persiste nada; apenas registra commits, rollbacks e
    eventos "publicados".

    Example:
        uow = InMemoryUnitOfWork()
        with uow:
            uow.publish_event(event)

        assert uow.committed
        assert len(uow.published_events) == 1
    """

    def __init__(self):
        super().__init__()
        self._committed = False
        self._rolled_back = False
        self._published_events: List[DomainEvent] = []

    def _begin_transaction(self) -> None:
        pass

    def commit(self) -> None:
        self._committed = True
        self._published_events.extend(self._events)
        self.clear_events()

    def rollback(self) -> None:
        self._rolled_back = True
        self.clear_events()

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events

    def reset(self) -> None:
        """Reset para próximo teste."""
        self._committed = False
        self._rolled_back = False
        self._published_events.clear()
        self.clear_events()
