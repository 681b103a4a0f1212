"""
Domain Events - Comunicação assíncrona entre camadas.

Eventos representam fatos já ocorridos (TicketAssigned, não AssignTicket).
São enfileirados no UnitOfWork e publicados somente após commit,
de modo que handlers nunca observam dados que foram revertidos.

Características:
- Auto-geração de ID e timestamp
- Serializáveis para transporte (Celery) e logging
- Rastreáveis via aggregate_id
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict
import uuid


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DomainEvent(ABC):
    """
    Classe base abstrata para Domain Events.

    Attributes:
        event_id: Identificador único do evento
        aggregate_id: ID do agregado que gerou o evento
        occurred_at: Momento em que o evento ocorreu (UTC)
        version: Versão do schema do evento (para evolução)

    Example:
        @dataclass
        class TicketCreatedEvent(DomainEvent):
            creator_id: int = 0

            @property
            def aggregate_type(self) -> str:
                return "Ticket"
    """

    aggregate_id: str = ""
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = field(default_factory=_utcnow)
    version: int = 1

    def __post_init__(self):
        if not self.aggregate_id:
            raise ValueError("aggregate_id é obrigatório")
        self.aggregate_id = str(self.aggregate_id)

    @property
    @abstractmethod
    def aggregate_type(self) -> str:
        """Tipo do agregado que gerou o evento (ex: "Ticket", "User")."""
        ...

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializa evento para dicionário.

        Usado no envio via Celery (JSON) e no logging estruturado.
        """
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "occurred_at": self.occurred_at.isoformat(),
            "version": self.version,
            "data": self._get_event_data(),
        }

    def _get_event_data(self) -> Dict[str, Any]:
        """Campos específicos do evento (tudo que não é da classe base)."""
        base_fields = {"event_id", "aggregate_id", "occurred_at", "version"}
        return {
            key: value
            for key, value in self.__dict__.items()
            if key not in base_fields and not key.startswith("_")
        }

    def __repr__(self) -> str:
        return (
            f"{self.event_type}("
            f"event_id={self.event_id[:8]}..., "
            f"aggregate_id={self.aggregate_id}, "
            f"occurred_at={self.occurred_at.isoformat()}"
            f")"
        )
