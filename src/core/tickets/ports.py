"""
Ports (Interfaces) do Domínio de Tickets.

Define os contratos que os Adapters de infraestrutura devem implementar
para persistência e consulta de tickets e atribuições.

Princípio:
    Core define interfaces → Adapters implementam
    Dependências sempre apontam para o Core

O repositório não valida nem captura erros: regras ficam nos
services, e falhas do store sobem como exceções originais.
"""

from dataclasses import replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Protocol, runtime_checkable
import itertools

from src.core.shared.exceptions import EntityNotFoundError

from .dtos import (
    AssignedTicketDetailDTO,
    ReceivedAssignedTicketDTO,
    SentAssignedTicketDTO,
)
from .entities import (
    AssignedTicketEntity,
    AssignmentStatus,
    TicketEntity,
    first_assignment,
    latest_assignment,
    utcnow,
)


@runtime_checkable
class TicketRepository(Protocol):
    """
    Interface para persistência de Tickets e registros de atribuição.

    Implementações:
    - DjangoTicketRepository (ORM)
    - InMemoryTicketRepository (para testes)
    """

    def add_ticket(self, ticket: TicketEntity) -> int:
        """Persiste novo ticket e retorna o ID atribuído pelo store."""
        ...

    def update_ticket(self, ticket: TicketEntity) -> None:
        """
        Substitui o conteúdo do ticket.

        Raises:
            EntityNotFoundError: Se o ticket não existe
        """
        ...

    def delete_tickets_by_id(self, ids: Iterable[int]) -> None:
        """Remove em lote; IDs inexistentes são ignorados (idempotente)."""
        ...

    def get_ticket_by_id(self, ticket_id: int) -> Optional[TicketEntity]:
        ...

    def check_list_ticket_exists(self, ids: Iterable[int]) -> bool:
        """True se todos os IDs (sem duplicatas) existem; lista vazia → False."""
        ...

    def check_if_user_is_creator_of_tickets(
        self, creator_id: int, ids: Iterable[int]
    ) -> bool:
        """True se o usuário criou todos os tickets; lista vazia → False."""
        ...

    def get_tickets_by_creator_id(
        self, creator_id: int
    ) -> List[AssignedTicketDetailDTO]:
        """Tickets do criador com atribuição mais recente e primeira."""
        ...

    def get_tickets_assigned_to_me(
        self, user_id: int
    ) -> List[ReceivedAssignedTicketDTO]:
        """Uma linha por registro em que o usuário é o responsável."""
        ...

    def get_tickets_assigned_by_me(
        self, user_id: int
    ) -> List[SentAssignedTicketDTO]:
        """Uma linha por registro em que o usuário é o atribuidor."""
        ...

    def search_tickets(
        self, user_id: int, name_pattern: str
    ) -> List[AssignedTicketDetailDTO]:
        """
        Busca por trecho do nome (sem diferenciar maiúsculas).

        Visíveis: tickets criados pelo usuário ou em que ele aparece
        como responsável ou atribuidor em alguma atribuição.
        """
        ...

    def add_assignment(self, assignment: AssignedTicketEntity) -> int:
        ...

    def get_assignment_by_id(
        self, assignment_id: int
    ) -> Optional[AssignedTicketEntity]:
        ...

    def get_assignments_for_ticket(
        self, ticket_id: int
    ) -> List[AssignedTicketEntity]:
        ...

    def update_assignment_status(
        self,
        assignment_id: int,
        status: AssignmentStatus,
        updated_at: datetime,
    ) -> None:
        ...


def join_distinct(names: Iterable[Optional[str]]) -> Optional[str]:
    """Junta nomes distintos com ", " preservando a primeira ocorrência."""
    seen: List[str] = []
    for name in names:
        if name and name not in seen:
            seen.append(name)
    return ", ".join(seen) if seen else None


class InMemoryTicketRepository:
    """
    Implementação em memória do TicketRepository.

    Útil para testes unitários sem banco. Os nomes dos usuários nas
    projeções vêm do repositório de usuários informado.

    Não usar em produção!
    """

    def __init__(self, user_repo=None):
        self._tickets: Dict[int, TicketEntity] = {}
        self._assignments: Dict[int, AssignedTicketEntity] = {}
        self._ticket_ids = itertools.count(1)
        self._assignment_ids = itertools.count(1)
        self.user_repo = user_repo

    # ---------------------------------------------------------------------
    # Tickets
    # ---------------------------------------------------------------------

    def add_ticket(self, ticket: TicketEntity) -> int:
        ticket_id = next(self._ticket_ids)
        self._tickets[ticket_id] = replace(ticket, id=ticket_id)
        ticket.id = ticket_id
        return ticket_id

    def update_ticket(self, ticket: TicketEntity) -> None:
        if ticket.id not in self._tickets:
            raise EntityNotFoundError(
                f"Ticket {ticket.id} not found",
                entity_type="Ticket",
                entity_id=ticket.id,
            )
        self._tickets[ticket.id] = replace(ticket)

    def delete_tickets_by_id(self, ids: Iterable[int]) -> None:
        for ticket_id in set(ids):
            if self._tickets.pop(ticket_id, None) is None:
                continue
            # cascade
            for assignment_id in [
                a.id for a in self._assignments.values()
                if a.ticket_id == ticket_id
            ]:
                del self._assignments[assignment_id]

    def get_ticket_by_id(self, ticket_id: int) -> Optional[TicketEntity]:
        ticket = self._tickets.get(ticket_id)
        return replace(ticket) if ticket else None

    def check_list_ticket_exists(self, ids: Iterable[int]) -> bool:
        unique_ids = set(ids)
        if not unique_ids:
            return False
        return all(ticket_id in self._tickets for ticket_id in unique_ids)

    def check_if_user_is_creator_of_tickets(
        self, creator_id: int, ids: Iterable[int]
    ) -> bool:
        unique_ids = set(ids)
        if not unique_ids:
            return False
        matches = [
            t for t in self._tickets.values()
            if t.id in unique_ids and t.creator_id == creator_id
        ]
        return len(matches) == len(unique_ids)

    # ---------------------------------------------------------------------
    # Atribuições
    # ---------------------------------------------------------------------

    def add_assignment(self, assignment: AssignedTicketEntity) -> int:
        assignment_id = next(self._assignment_ids)
        self._assignments[assignment_id] = replace(assignment, id=assignment_id)
        assignment.id = assignment_id
        return assignment_id

    def get_assignment_by_id(
        self, assignment_id: int
    ) -> Optional[AssignedTicketEntity]:
        assignment = self._assignments.get(assignment_id)
        return replace(assignment) if assignment else None

    def get_assignments_for_ticket(
        self, ticket_id: int
    ) -> List[AssignedTicketEntity]:
        return [
            replace(a) for a in self._assignments.values()
            if a.ticket_id == ticket_id
        ]

    def update_assignment_status(
        self,
        assignment_id: int,
        status: AssignmentStatus,
        updated_at: datetime,
    ) -> None:
        assignment = self._assignments.get(assignment_id)
        if assignment is None:
            raise EntityNotFoundError(
                f"Assignment {assignment_id} not found",
                entity_type="AssignedTicket",
                entity_id=assignment_id,
            )
        assignment.status = status
        assignment.updated_at = updated_at

    # ---------------------------------------------------------------------
    # Projeções
    # ---------------------------------------------------------------------

    def get_tickets_by_creator_id(
        self, creator_id: int
    ) -> List[AssignedTicketDetailDTO]:
        tickets = [t for t in self._tickets.values() if t.creator_id == creator_id]
        return [self._to_detail(t) for t in sorted(tickets, key=lambda t: t.id)]

    def get_tickets_assigned_to_me(
        self, user_id: int
    ) -> List[ReceivedAssignedTicketDTO]:
        rows = []
        for assignment in self._ordered_assignments():
            if assignment.assignee_id != user_id:
                continue
            ticket = self._tickets[assignment.ticket_id]
            rows.append(
                ReceivedAssignedTicketDTO(
                    assignment_id=assignment.id,
                    ticket_id=ticket.id,
                    name=ticket.name,
                    description=ticket.description,
                    file_description=ticket.file_description,
                    assigner_id=assignment.assigner_id,
                    assigner_name=self._user_name(assignment.assigner_id),
                    time_assign=assignment.updated_at or utcnow(),
                    status=assignment.status.value,
                )
            )
        return rows

    def get_tickets_assigned_by_me(
        self, user_id: int
    ) -> List[SentAssignedTicketDTO]:
        rows = []
        for assignment in self._ordered_assignments():
            if assignment.assigner_id != user_id:
                continue
            ticket = self._tickets[assignment.ticket_id]
            rows.append(
                SentAssignedTicketDTO(
                    ticket_id=ticket.id,
                    assignment_id=assignment.id,
                    assignee_id=assignment.assignee_id,
                    assignee_name=self._user_name(assignment.assignee_id),
                    name=ticket.name,
                    description=ticket.description,
                    file_description=ticket.file_description,
                    created_at=ticket.created_at,
                    assigned_at=assignment.updated_at,
                    status=assignment.status.value,
                )
            )
        return rows

    def search_tickets(
        self, user_id: int, name_pattern: str
    ) -> List[AssignedTicketDetailDTO]:
        pattern = (name_pattern or "").lower()
        results = []
        for ticket in sorted(self._tickets.values(), key=lambda t: t.id):
            if pattern not in ticket.name.lower():
                continue
            assignments = self._assignments_of(ticket.id)
            involved = ticket.creator_id == user_id or any(
                user_id in (a.assignee_id, a.assigner_id) for a in assignments
            )
            if not involved:
                continue

            detail = self._to_detail(ticket, first_by="created_at")
            by_creation = sorted(assignments, key=lambda a: (a.created_at, a.id))
            detail.assignee_name = join_distinct(
                self._user_name(a.assignee_id) for a in by_creation
            )
            detail.assigner_name = join_distinct(
                self._user_name(a.assigner_id) for a in by_creation
            )
            results.append(detail)
        return results

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------

    def _assignments_of(self, ticket_id: int) -> List[AssignedTicketEntity]:
        return [a for a in self._assignments.values() if a.ticket_id == ticket_id]

    def _ordered_assignments(self) -> List[AssignedTicketEntity]:
        return sorted(self._assignments.values(), key=lambda a: a.id)

    def _user_name(self, user_id: Optional[int]) -> Optional[str]:
        if user_id is None or self.user_repo is None:
            return None
        user = self.user_repo.get_user_by_id(user_id)
        return user.name if user else None

    def _to_detail(
        self, ticket: TicketEntity, first_by: str = "updated_at"
    ) -> AssignedTicketDetailDTO:
        assignments = self._assignments_of(ticket.id)
        latest = latest_assignment(assignments)
        first = first_assignment(assignments, by=first_by)

        detail = AssignedTicketDetailDTO(
            id=ticket.id,
            name=ticket.name,
            description=ticket.description,
            file_description=ticket.file_description,
            creator_id=ticket.creator_id,
        )
        if latest is not None:
            detail.assignee_id = latest.assignee_id
            detail.assignee_name = self._user_name(latest.assignee_id)
            detail.assigner_id = latest.assigner_id
            detail.assigner_name = self._user_name(latest.assigner_id)
            detail.assigned_at = latest.updated_at
            detail.status = latest.status.value
        if first is not None:
            detail.first_assignee_id = first.assignee_id
            detail.first_assignee_name = self._user_name(first.assignee_id)
        return detail

    def count(self) -> int:
        return len(self._tickets)

    def clear(self) -> None:
        self._tickets.clear()
        self._assignments.clear()
