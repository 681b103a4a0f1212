"""
Use Cases (Application Services) do Domínio de Tickets.

Este módulo contém os casos de uso da aplicação, que orquestram
a lógica de negócio coordenando entidades, repositórios e eventos.

Comandos:
- CreateTicketService: Cria novo ticket
- UpdateTicketService: Substitui conteúdo (apenas o criador)
- DeleteTicketsService: Exclusão em lote (apenas o criador)
- AssignTicketService: Adiciona registro de atribuição
- ChangeAssignmentStatusService: Responsável muda o status

Consultas:
- GetTicketByIdService
- GetTicketsByCreatorService
- GetTicketsAssignedToMeService
- GetTicketsAssignedByMeService
- SearchTicketsService

Princípios:
- Um Use Case = Uma operação de negócio
- Dependências injetadas (DI)
- Regras lançam exceções de domínio; BaseService.execute() converte em Result
"""

import logging

from src.core.shared.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ForbiddenError,
    ValidationError,
)
from src.core.shared.interfaces import UnitOfWork
from src.core.shared.result import Result
from src.core.shared.services import BaseService
from src.core.users.ports import UserRepository

from .dtos import (
    AssignTicketInputDTO,
    ChangeAssignmentStatusInputDTO,
    CreateTicketInputDTO,
    DeleteTicketsInputDTO,
    SearchTicketsQueryDTO,
    TicketOutputDTO,
    UpdateTicketInputDTO,
)
from .entities import (
    AssignedTicketEntity,
    AssignmentStatus,
    TicketEntity,
    latest_assignment,
)
from .events import (
    AssignmentStatusChangedEvent,
    TicketAssignedEvent,
    TicketCreatedEvent,
    TicketsDeletedEvent,
    TicketUpdatedEvent,
)
from .ports import TicketRepository

logger = logging.getLogger(__name__)


def _ticket_not_found(ticket_id) -> EntityNotFoundError:
    return EntityNotFoundError(
        f"Ticket {ticket_id} not found",
        entity_type="Ticket",
        entity_id=ticket_id,
    )


def _user_not_found(user_id) -> EntityNotFoundError:
    return EntityNotFoundError(
        f"User {user_id} not found",
        entity_type="User",
        entity_id=user_id,
    )


# =============================================================================
# COMANDOS
# =============================================================================

class CreateTicketService(BaseService):
    """
    Use Case: Criar um novo ticket.

    Fluxo:
    1. Validar nome (entidade)
    2. Verificar se o criador existe
    3. Persistir em transação
    4. Disparar TicketCreatedEvent (publicado após commit)

    Example:
        service = CreateTicketService(ticket_repo, user_repo, uow)
        result = service.execute(
            CreateTicketInputDTO(name="Fix bug", description="...", creator_id=7)
        )
        result.data  # ID do ticket
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        user_repo: UserRepository,
        uow: UnitOfWork,
    ):
        self.ticket_repo = ticket_repo
        self.user_repo = user_repo
        self.uow = uow

    def _handle(self, input_dto: CreateTicketInputDTO) -> Result[int]:
        ticket = TicketEntity.create(
            name=input_dto.name,
            description=input_dto.description,
            creator_id=input_dto.creator_id,
            file_description=input_dto.file_description,
        )

        if not self.user_repo.check_user_exists(input_dto.creator_id):
            raise _user_not_found(input_dto.creator_id)

        with self.uow:
            ticket_id = self.ticket_repo.add_ticket(ticket)
            self.uow.publish_event(
                TicketCreatedEvent(
                    aggregate_id=str(ticket_id),
                    creator_id=ticket.creator_id,
                    name=ticket.name,
                )
            )

        logger.info(f"Ticket created: {ticket_id} by user {ticket.creator_id}")
        return Result.success(ticket_id, "Ticket Created Successfully", http_status=201)


class UpdateTicketService(BaseService):
    """
    Use Case: Substituir nome, descrição e anexo de um ticket.

    Regras:
    - Ticket deve existir
    - Apenas o criador pode atualizar
    """

    def __init__(self, ticket_repo: TicketRepository, uow: UnitOfWork):
        self.ticket_repo = ticket_repo
        self.uow = uow

    def _handle(self, input_dto: UpdateTicketInputDTO) -> Result[dict]:
        ticket = self.ticket_repo.get_ticket_by_id(input_dto.ticket_id)
        if ticket is None:
            raise _ticket_not_found(input_dto.ticket_id)

        if not ticket.is_created_by(input_dto.caller_id):
            raise ForbiddenError("Only the creator can update this ticket")

        ticket.replace_content(
            name=input_dto.name,
            description=input_dto.description,
            file_description=input_dto.file_description,
        )

        with self.uow:
            self.ticket_repo.update_ticket(ticket)
            self.uow.publish_event(
                TicketUpdatedEvent(
                    aggregate_id=str(ticket.id),
                    updated_by_id=input_dto.caller_id,
                    name=ticket.name,
                )
            )

        return Result.success(
            TicketOutputDTO.from_entity(ticket).to_dict(),
            "Ticket Updated Successfully",
        )


class DeleteTicketsService(BaseService):
    """
    Use Case: Excluir tickets em lote.

    Tudo ou nada: se algum ID não existe (404) ou não pertence ao
    chamador (403), nada é excluído. Atribuições caem em cascata.
    """

    def __init__(self, ticket_repo: TicketRepository, uow: UnitOfWork):
        self.ticket_repo = ticket_repo
        self.uow = uow

    def _handle(self, input_dto: DeleteTicketsInputDTO) -> Result[list]:
        ids = sorted(set(input_dto.ids or ()))
        if not ids:
            raise ValidationError("At least one ticket id is required", field="ids")

        if not self.ticket_repo.check_list_ticket_exists(ids):
            raise EntityNotFoundError(
                "One or more tickets not found",
                entity_type="Ticket",
            )

        if not self.ticket_repo.check_if_user_is_creator_of_tickets(
            input_dto.caller_id, ids
        ):
            raise ForbiddenError("Only the creator can delete these tickets")

        with self.uow:
            self.ticket_repo.delete_tickets_by_id(ids)
            self.uow.publish_event(
                TicketsDeletedEvent(
                    aggregate_id=str(input_dto.caller_id),
                    ticket_ids=ids,
                )
            )

        logger.info(f"Tickets deleted by user {input_dto.caller_id}: {ids}")
        return Result.success(ids, "Tickets Deleted Successfully")


class AssignTicketService(BaseService):
    """
    Use Case: Atribuir ticket a um usuário.

    Cada atribuição cria um novo registro (histórico append-only)
    com status Pending.

    Regras:
    - Ticket e responsável devem existir
    - Quem atribui deve ser o criador ou o responsável atual
    - Não reatribuir ao próprio responsável atual

    Example:
        service = AssignTicketService(ticket_repo, user_repo, uow)
        result = service.execute(
            AssignTicketInputDTO(ticket_id=1, assignee_id=9, assigner_id=7)
        )
        result.data  # ID do registro de atribuição
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        user_repo: UserRepository,
        uow: UnitOfWork,
    ):
        self.ticket_repo = ticket_repo
        self.user_repo = user_repo
        self.uow = uow

    def _handle(self, input_dto: AssignTicketInputDTO) -> Result[int]:
        ticket = self.ticket_repo.get_ticket_by_id(input_dto.ticket_id)
        if ticket is None:
            raise _ticket_not_found(input_dto.ticket_id)

        if not self.user_repo.check_user_exists(input_dto.assignee_id):
            raise _user_not_found(input_dto.assignee_id)

        current = latest_assignment(
            self.ticket_repo.get_assignments_for_ticket(ticket.id)
        )
        previous_assignee_id = current.assignee_id if current else None

        if not (
            ticket.is_created_by(input_dto.assigner_id)
            or previous_assignee_id == input_dto.assigner_id
        ):
            raise ForbiddenError(
                "Only the creator or the current assignee can assign this ticket"
            )

        if previous_assignee_id == input_dto.assignee_id:
            raise BusinessRuleViolationError(
                "Ticket is already assigned to this user",
                rule="already_assigned",
            )

        assignment = AssignedTicketEntity.create(
            ticket_id=ticket.id,
            assignee_id=input_dto.assignee_id,
            assigner_id=input_dto.assigner_id,
        )

        with self.uow:
            assignment_id = self.ticket_repo.add_assignment(assignment)
            self.uow.publish_event(
                TicketAssignedEvent(
                    aggregate_id=str(ticket.id),
                    assignment_id=assignment_id,
                    assignee_id=input_dto.assignee_id,
                    assigner_id=input_dto.assigner_id,
                    previous_assignee_id=previous_assignee_id,
                )
            )

        logger.info(
            f"Ticket {ticket.id} assigned to {input_dto.assignee_id} "
            f"by {input_dto.assigner_id}"
        )
        return Result.success(assignment_id, "Ticket Assigned Successfully", http_status=201)


class ChangeAssignmentStatusService(BaseService):
    """Use Case: Responsável altera o status de um registro de atribuição."""

    def __init__(self, ticket_repo: TicketRepository, uow: UnitOfWork):
        self.ticket_repo = ticket_repo
        self.uow = uow

    def _handle(self, input_dto: ChangeAssignmentStatusInputDTO) -> Result[dict]:
        status = AssignmentStatus.from_string(input_dto.status)

        assignment = self.ticket_repo.get_assignment_by_id(input_dto.assignment_id)
        if assignment is None:
            raise EntityNotFoundError(
                f"Assignment {input_dto.assignment_id} not found",
                entity_type="AssignedTicket",
                entity_id=input_dto.assignment_id,
            )

        if assignment.assignee_id != input_dto.caller_id:
            raise ForbiddenError("Only the assignee can change this status")

        # Apenas o registro corrente do ticket pode mudar de status
        current = latest_assignment(
            self.ticket_repo.get_assignments_for_ticket(assignment.ticket_id)
        )
        if current is None or current.id != assignment.id:
            raise BusinessRuleViolationError(
                "Assignment has been superseded by a newer one",
                rule="superseded_assignment",
            )

        previous_status = assignment.status
        assignment.change_status(status)

        with self.uow:
            self.ticket_repo.update_assignment_status(
                assignment.id, assignment.status, assignment.updated_at
            )
            self.uow.publish_event(
                AssignmentStatusChangedEvent(
                    aggregate_id=str(assignment.ticket_id),
                    assignment_id=assignment.id,
                    previous_status=previous_status.value,
                    new_status=status.value,
                    changed_by_id=input_dto.caller_id,
                    assigner_id=assignment.assigner_id,
                )
            )

        return Result.success(
            {"assignment_id": assignment.id, "status": status.value},
            "Status Updated Successfully",
        )


# =============================================================================
# CONSULTAS
# =============================================================================

class GetTicketByIdService(BaseService):
    """Use Case: Obter ticket por ID."""

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def _handle(self, ticket_id: int) -> Result[dict]:
        ticket = self.ticket_repo.get_ticket_by_id(ticket_id)
        if ticket is None:
            raise _ticket_not_found(ticket_id)
        return Result.success(TicketOutputDTO.from_entity(ticket).to_dict())


class GetTicketsByCreatorService(BaseService):
    """Use Case: Tickets criados pelo usuário, com resumo das atribuições."""

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def _handle(self, creator_id: int) -> Result[list]:
        tickets = self.ticket_repo.get_tickets_by_creator_id(creator_id)
        return Result.success([t.to_dict() for t in tickets])


class GetTicketsAssignedToMeService(BaseService):
    """Use Case: Registros de atribuição recebidos pelo usuário."""

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def _handle(self, user_id: int) -> Result[list]:
        rows = self.ticket_repo.get_tickets_assigned_to_me(user_id)
        return Result.success([r.to_dict() for r in rows])


class GetTicketsAssignedByMeService(BaseService):
    """Use Case: Registros de atribuição feitos pelo usuário."""

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def _handle(self, user_id: int) -> Result[list]:
        rows = self.ticket_repo.get_tickets_assigned_by_me(user_id)
        return Result.success([r.to_dict() for r in rows])


class SearchTicketsService(BaseService):
    """
    Use Case: Buscar tickets visíveis ao usuário pelo nome.

    Padrão vazio retorna todos os tickets visíveis.
    """

    def __init__(self, ticket_repo: TicketRepository):
        self.ticket_repo = ticket_repo

    def _handle(self, query: SearchTicketsQueryDTO) -> Result[list]:
        pattern = (query.name_pattern or "").strip()
        rows = self.ticket_repo.search_tickets(query.user_id, pattern)
        return Result.success([r.to_dict() for r in rows])


__all__ = [
    "CreateTicketService",
    "UpdateTicketService",
    "DeleteTicketsService",
    "AssignTicketService",
    "ChangeAssignmentStatusService",
    "GetTicketByIdService",
    "GetTicketsByCreatorService",
    "GetTicketsAssignedToMeService",
    "GetTicketsAssignedByMeService",
    "SearchTicketsService",
]
