"""
Domain Events do Domínio de Tickets.

Eventos:
- TicketCreatedEvent: Novo ticket foi criado
- TicketUpdatedEvent: Conteúdo do ticket foi substituído
- TicketsDeletedEvent: Lote de tickets foi excluído
- TicketAssignedEvent: Novo registro de atribuição
- AssignmentStatusChangedEvent: Responsável mudou o status

Uso:
    Eventos são criados nos use cases e publicados através do
    UnitOfWork após commit bem-sucedido.

    with uow:
        ticket_id = repo.add_ticket(ticket)
        uow.publish_event(TicketCreatedEvent(aggregate_id=str(ticket_id), ...))
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.core.shared.events import DomainEvent


@dataclass
class TicketCreatedEvent(DomainEvent):
    """
    Evento: Ticket foi criado.

    Attributes:
        creator_id: ID do usuário que criou
        name: Nome do ticket
    """

    creator_id: int = 0
    name: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Ticket"


@dataclass
class TicketUpdatedEvent(DomainEvent):
    """Evento: Conteúdo do ticket foi substituído pelo criador."""

    updated_by_id: int = 0
    name: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Ticket"


@dataclass
class TicketsDeletedEvent(DomainEvent):
    """
    Evento: Tickets foram excluídos em lote.

    aggregate_id é o ID do criador; os tickets excluídos
    vão em ticket_ids (atribuições caem em cascata).
    """

    ticket_ids: List[int] = field(default_factory=list)

    @property
    def aggregate_type(self) -> str:
        return "User"


@dataclass
class TicketAssignedEvent(DomainEvent):
    """
    Evento: Ticket foi atribuído a um usuário.

    Handlers típicos:
    - Notificar o responsável
    - Registrar em log de auditoria

    Attributes:
        assignment_id: ID do registro de atribuição criado
        assignee_id: Usuário que recebeu
        assigner_id: Usuário que atribuiu
        previous_assignee_id: Responsável anterior (se reatribuição)
    """

    assignment_id: int = 0
    assignee_id: int = 0
    assigner_id: int = 0
    previous_assignee_id: Optional[int] = None

    @property
    def aggregate_type(self) -> str:
        return "Ticket"

    def _get_event_data(self) -> Dict[str, Any]:
        data = {
            "assignment_id": self.assignment_id,
            "assignee_id": self.assignee_id,
            "assigner_id": self.assigner_id,
        }
        if self.previous_assignee_id is not None:
            data["previous_assignee_id"] = self.previous_assignee_id
        return data


@dataclass
class AssignmentStatusChangedEvent(DomainEvent):
    """
    Evento: Status de uma atribuição mudou.

    aggregate_id é o ID do ticket.
    """

    assignment_id: int = 0
    previous_status: str = ""
    new_status: str = ""
    changed_by_id: int = 0
    assigner_id: int = 0

    @property
    def aggregate_type(self) -> str:
        return "Ticket"
