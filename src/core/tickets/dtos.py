"""
Data Transfer Objects (DTOs) do Domínio de Tickets.

Tipos de DTOs:
- Input DTOs: comandos vindos da API (já com o ID do chamador)
- Output DTOs: ticket completo para resposta
- Projection DTOs: visões somente leitura que juntam ticket,
  registros de atribuição e nomes de usuários (calculadas na leitura)

Um único formato canônico por operação.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from .entities import TicketEntity


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CreateTicketInputDTO:
    """
    DTO de entrada para criar ticket.

    Attributes:
        name: Nome do ticket (obrigatório)
        description: Descrição detalhada
        creator_id: ID do usuário autenticado
        file_description: Descrição do anexo (opcional)
    """

    name: str
    description: str
    creator_id: int
    file_description: Optional[str] = None


@dataclass(frozen=True)
class UpdateTicketInputDTO:
    """
    DTO de entrada para substituir o conteúdo de um ticket.

    Apenas o criador pode atualizar.
    """

    ticket_id: int
    caller_id: int
    name: str
    description: str = ""
    file_description: Optional[str] = None


@dataclass(frozen=True)
class DeleteTicketsInputDTO:
    """
    DTO de entrada para exclusão em lote.

    Attributes:
        ids: IDs dos tickets (tuple para ser hashable)
        caller_id: Deve ser o criador de todos os tickets
    """

    ids: Tuple[int, ...]
    caller_id: int


@dataclass(frozen=True)
class AssignTicketInputDTO:
    """
    DTO de entrada para atribuir ticket.

    Attributes:
        ticket_id: ID do ticket
        assignee_id: Usuário que vai receber o ticket
        assigner_id: Usuário autenticado que está atribuindo
    """

    ticket_id: int
    assignee_id: int
    assigner_id: int


@dataclass(frozen=True)
class ChangeAssignmentStatusInputDTO:
    """DTO de entrada para o responsável alterar o status da atribuição."""

    assignment_id: int
    status: str
    caller_id: int


@dataclass(frozen=True)
class SearchTicketsQueryDTO:
    """
    Parâmetros de busca.

    Attributes:
        user_id: Usuário autenticado (define a visibilidade)
        name_pattern: Trecho do nome (sem diferenciar maiúsculas)
    """

    user_id: int
    name_pattern: str = ""


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class TicketOutputDTO:
    """DTO de saída com os dados do ticket."""

    id: int
    name: str
    description: str
    file_description: Optional[str]
    creator_id: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, entity: TicketEntity) -> "TicketOutputDTO":
        return cls(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            file_description=entity.file_description,
            creator_id=entity.creator_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "file_description": self.file_description,
            "creator_id": self.creator_id,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


# =============================================================================
# PROJECTION DTOs (Leitura)
# =============================================================================

@dataclass
class AssignedTicketDetailDTO:
    """
    Ticket com o resumo das suas atribuições.

    Usado por "tickets que criei" e pela busca. Campos de atribuição
    ficam None quando o ticket nunca foi atribuído.

    Attributes:
        assignee_id / assignee_name: Responsável da atribuição mais recente.
            Na busca, assignee_name junta (", ") todos os responsáveis
            distintos do ticket.
        assigner_id / assigner_name: Quem fez a atribuição mais recente
            (na busca, todos os atribuidores distintos).
        first_assignee_id / first_assignee_name: Primeiro responsável.
        assigned_at: updated_at da atribuição mais recente.
        status: Status da atribuição mais recente.
    """

    id: int
    name: str
    description: str
    file_description: Optional[str]
    creator_id: int
    assignee_id: Optional[int] = None
    assignee_name: Optional[str] = None
    assigner_id: Optional[int] = None
    assigner_name: Optional[str] = None
    first_assignee_id: Optional[int] = None
    first_assignee_name: Optional[str] = None
    assigned_at: Optional[datetime] = None
    status: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "file_description": self.file_description,
            "creator_id": self.creator_id,
            "assignee_id": self.assignee_id,
            "assignee_name": self.assignee_name,
            "assigner_id": self.assigner_id,
            "assigner_name": self.assigner_name,
            "first_assignee_id": self.first_assignee_id,
            "first_assignee_name": self.first_assignee_name,
            "assigned_at": _iso(self.assigned_at),
            "status": self.status,
        }


@dataclass
class ReceivedAssignedTicketDTO:
    """
    Registro de atribuição recebido pelo usuário.

    Uma linha por registro: um ticket atribuído duas vezes ao mesmo
    usuário aparece duas vezes.
    """

    assignment_id: int
    ticket_id: int
    name: str
    description: str
    file_description: Optional[str]
    assigner_id: int
    assigner_name: str
    time_assign: datetime
    status: str

    def to_dict(self) -> dict:
        return {
            "assignment_id": self.assignment_id,
            "ticket_id": self.ticket_id,
            "name": self.name,
            "description": self.description,
            "file_description": self.file_description,
            "assigner_id": self.assigner_id,
            "assigner_name": self.assigner_name,
            "time_assign": _iso(self.time_assign),
            "status": self.status,
        }


@dataclass
class SentAssignedTicketDTO:
    """Registro de atribuição feito pelo usuário (uma linha por registro)."""

    ticket_id: int
    assignment_id: int
    assignee_id: int
    assignee_name: str
    name: str
    description: str
    file_description: Optional[str]
    created_at: datetime
    assigned_at: datetime
    status: str

    def to_dict(self) -> dict:
        return {
            "ticket_id": self.ticket_id,
            "assignment_id": self.assignment_id,
            "assignee_id": self.assignee_id,
            "assignee_name": self.assignee_name,
            "name": self.name,
            "description": self.description,
            "file_description": self.file_description,
            "created_at": _iso(self.created_at),
            "assigned_at": _iso(self.assigned_at),
            "status": self.status,
        }
