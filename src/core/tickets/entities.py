"""
Entidades do Domínio de Tickets.

Entidades:
- TicketEntity: unidade de trabalho criada por um usuário
- AssignedTicketEntity: registro de atribuição (ticket, responsável, atribuidor)
- AssignmentStatus: estados de um registro de atribuição

Regras de Negócio Encapsuladas:
- Nome do ticket obrigatório (após trim)
- Histórico de atribuições é append-only: cada (re)atribuição cria
  um novo registro; apenas status e updated_at mudam depois
- Atribuição "atual" = registro com maior updated_at (desempate por id);
  "primeira" = menor updated_at (desempate por id)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Iterable, Optional

from src.core.shared.exceptions import ValidationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AssignmentStatus(Enum):
    """
    Estados de um registro de atribuição.

    Fluxo:
        PENDING → IN_PROGRESS → DONE
            ↓
        REJECTED
    """

    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    DONE = "Done"
    REJECTED = "Rejected"

    @classmethod
    def from_string(cls, value: str) -> "AssignmentStatus":
        """
        Converte string (nome ou valor do enum) para AssignmentStatus.

        Raises:
            ValidationError: Se valor inválido
        """
        normalized = (value or "").strip()
        try:
            return cls[normalized.upper().replace(" ", "_")]
        except KeyError:
            pass

        for status in cls:
            if status.value.lower() == normalized.lower():
                return status

        raise ValidationError(f"Invalid status: {value}", field="status")


@dataclass
class TicketEntity:
    """
    Entidade de Domínio: Ticket.

    Invariantes:
    - Nome não pode ser vazio
    - Criador deve existir (verificado pelo service)

    Attributes:
        id: Identificador (None até ser persistido)
        name: Nome do ticket
        description: Descrição detalhada
        file_description: Descrição do anexo (opcional)
        creator_id: ID do usuário criador
        created_at: Data/hora de criação
        updated_at: Data/hora da última atualização

    Example:
        ticket = TicketEntity.create(
            name="Fix bug",
            description="Login falha com senha correta",
            creator_id=7,
        )
    """

    id: Optional[int] = None
    name: str = ""
    description: str = ""
    file_description: Optional[str] = None
    creator_id: Optional[int] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    NAME_MAX_LENGTH: ClassVar[int] = 200

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        creator_id: int,
        file_description: Optional[str] = None,
    ) -> "TicketEntity":
        """
        Factory method para criar ticket com validações.

        Raises:
            ValidationError: Se nome vazio/longo ou criador ausente
        """
        name = cls._validate_name(name)
        if creator_id is None:
            raise ValidationError("Creator is required", field="creator_id")

        now = utcnow()
        return cls(
            name=name,
            description=(description or "").strip(),
            file_description=_optional(file_description),
            creator_id=creator_id,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def _validate_name(cls, name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("Name is required", field="name")
        if len(cleaned) > cls.NAME_MAX_LENGTH:
            raise ValidationError(
                f"Name must be at most {cls.NAME_MAX_LENGTH} characters",
                field="name",
            )
        return cleaned

    def replace_content(
        self,
        name: str,
        description: str,
        file_description: Optional[str],
    ) -> None:
        """
        Substitui o conteúdo do ticket (update completo).

        O criador não muda.
        """
        self.name = self._validate_name(name)
        self.description = (description or "").strip()
        self.file_description = _optional(file_description)
        self.updated_at = utcnow()

    def is_created_by(self, user_id: int) -> bool:
        return self.creator_id == user_id


@dataclass
class AssignedTicketEntity:
    """
    Entidade de Domínio: Registro de atribuição.

    Liga um ticket, o responsável (assignee) e quem atribuiu
    (assigner) em um ponto no tempo.

    Attributes:
        id: Identificador (None até ser persistido)
        ticket_id: Ticket atribuído
        assignee_id: Usuário que recebeu o ticket
        assigner_id: Usuário que fez a atribuição
        status: Estado do registro
        created_at: Momento da atribuição
        updated_at: Última mudança de status
    """

    id: Optional[int] = None
    ticket_id: Optional[int] = None
    assignee_id: Optional[int] = None
    assigner_id: Optional[int] = None
    status: AssignmentStatus = AssignmentStatus.PENDING
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        ticket_id: int,
        assignee_id: int,
        assigner_id: int,
    ) -> "AssignedTicketEntity":
        """Cria registro com status inicial PENDING."""
        if assignee_id is None:
            raise ValidationError("Assignee is required", field="assignee_id")
        now = utcnow()
        return cls(
            ticket_id=ticket_id,
            assignee_id=assignee_id,
            assigner_id=assigner_id,
            status=AssignmentStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    def change_status(self, status: AssignmentStatus) -> None:
        self.status = status
        self.updated_at = utcnow()


def latest_assignment(
    assignments: Iterable[AssignedTicketEntity],
) -> Optional[AssignedTicketEntity]:
    """Registro mais recente por updated_at (desempate: maior id)."""
    ordered = sorted(assignments, key=lambda a: (a.updated_at, a.id or 0))
    return ordered[-1] if ordered else None


def first_assignment(
    assignments: Iterable[AssignedTicketEntity],
    by: str = "updated_at",
) -> Optional[AssignedTicketEntity]:
    """Registro mais antigo pelo campo `by` (desempate: menor id)."""
    ordered = sorted(assignments, key=lambda a: (getattr(a, by), a.id or 0))
    return ordered[0] if ordered else None


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None

