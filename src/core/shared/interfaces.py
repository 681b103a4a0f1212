"""
Interfaces (Ports) - Contratos entre Core e Adapters.

Ports deste módulo são transversais a todos os domínios:
- UnitOfWork: fronteira transacional dos comandos
- EventPublisher: saída de Domain Events

Princípio: Core define interfaces; Adapters implementam.
O fluxo de dependência sempre aponta para o Core.
"""

from abc import ABC, abstractmethod
from typing import List

from .events import DomainEvent


class UnitOfWork(ABC):
    """
    Unit of Work - Coordena transações atômicas.

    Pattern: Context Manager
        with uow:
            repo.add_ticket(ticket)
            uow.publish_event(event)
        # Commit automático ao sair sem erro
        # Rollback automático se exceção

    Eventos enfileirados com publish_event() só são entregues ao
    publisher depois de um commit bem-sucedido; rollback os descarta.
    """

    def __init__(self):
        self._events: List[DomainEvent] = []

    def __enter__(self) -> "UnitOfWork":
        self._begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False  # Não suprime exceções

    @abstractmethod
    def _begin_transaction(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """
        Persiste mudanças e publica eventos.

        Ordem: commit no banco → publicação dos eventos → limpeza.
        """
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """Desfaz mudanças e descarta eventos."""
        raise NotImplementedError

    def publish_event(self, event: DomainEvent) -> None:
        """Enfileira evento para publicação após commit."""
        self._events.append(event)

    def collect_events(self) -> List[DomainEvent]:
        """Retorna eventos enfileirados (para testing/debugging)."""
        return list(self._events)

    def clear_events(self) -> None:
        self._events.clear()


class EventPublisher(ABC):
    """
    Interface para publicação de eventos.

    Adapters implementam para integrar com sistemas de mensageria
    (Celery) ou apenas registrar em log.
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        raise NotImplementedError

    def publish_batch(self, events: List[DomainEvent]) -> None:
        for event in events:
            self.publish(event)
