"""
Repositórios Django para persistência de Usuários e Tickets.

Implementam as interfaces (Ports) definidas no Core.
São DRIVEN ADAPTERS - acionados pelo Core em resposta a operações.

Responsabilidades:
- Implementar UserRepository e TicketRepository
- Mapear entities para models e vice-versa
- Montar as projeções de leitura (Subquery/OuterRef)

Princípios:
- Repository não contém lógica de negócio nem valida entrada
- Erros do banco (ex: IntegrityError) sobem sem tratamento
- Usa Mapper para conversões
"""

from collections import defaultdict
from datetime import datetime
from typing import Iterable, List, Optional
import logging

from django.db.models import Exists, OuterRef, Q, Subquery
from django.utils import timezone

from src.core.shared.exceptions import EntityNotFoundError
from src.core.tickets.dtos import (
    AssignedTicketDetailDTO,
    ReceivedAssignedTicketDTO,
    SentAssignedTicketDTO,
)
from src.core.tickets.entities import (
    AssignedTicketEntity,
    AssignmentStatus,
    TicketEntity,
)
from src.core.tickets.ports import join_distinct
from src.core.users.entities import UserEntity

from .mappers import AssignedTicketMapper, TicketMapper, UserMapper
from .models import AssignedTicketModel, TicketModel, UserModel

logger = logging.getLogger(__name__)


class DjangoUserRepository:
    """
    Implementação Django do UserRepository.

    Example:
        repo = DjangoUserRepository()
        user_id = repo.create_user(UserEntity.create(...))
        repo.get_user_by_username("alice")
    """

    def get_user_by_username(self, name: str) -> Optional[UserEntity]:
        model = UserModel.objects.filter(name=name).first()
        return UserMapper.to_entity(model) if model else None

    def get_user_by_id(self, user_id: int) -> Optional[UserEntity]:
        model = UserModel.objects.filter(id=user_id).first()
        return UserMapper.to_entity(model) if model else None

    def create_user(self, user: UserEntity) -> int:
        """
        Insere o usuário; o ID vem do autoincremento do banco.

        Raises:
            IntegrityError: Se o nome já existe (constraint uq_users_name)
        """
        model = UserMapper.to_model(user)
        model.save(force_insert=True)
        user.id = model.id
        logger.debug(f"User inserted: {model.id}")
        return model.id

    def check_user_exists(self, user_id: int) -> bool:
        return UserModel.objects.filter(id=user_id).exists()


class DjangoTicketRepository:
    """
    Implementação Django do TicketRepository.

    Atribuição "mais recente" = maior updated_at (desempate: maior id);
    "primeira" = menor updated_at (desempate: menor id).

    Example:
        repo = DjangoTicketRepository()
        ticket_id = repo.add_ticket(ticket_entity)
        repo.get_tickets_by_creator_id(7)
    """

    def __init__(self):
        self._mapper = TicketMapper()

    # ---------------------------------------------------------------------
    # Tickets
    # ---------------------------------------------------------------------

    def add_ticket(self, ticket: TicketEntity) -> int:
        model = self._mapper.to_model(ticket)
        model.save(force_insert=True)
        ticket.id = model.id
        logger.debug(f"Ticket inserted: {model.id}")
        return model.id

    def update_ticket(self, ticket: TicketEntity) -> None:
        updated = TicketModel.objects.filter(id=ticket.id).update(
            name=ticket.name,
            description=ticket.description,
            file_description=ticket.file_description,
            updated_at=ticket.updated_at,
        )
        if not updated:
            raise EntityNotFoundError(
                f"Ticket {ticket.id} not found",
                entity_type="Ticket",
                entity_id=ticket.id,
            )

    def delete_tickets_by_id(self, ids: Iterable[int]) -> None:
        deleted, per_model = TicketModel.objects.filter(id__in=list(ids)).delete()
        logger.debug(f"Rows deleted: {deleted} {per_model}")

    def get_ticket_by_id(self, ticket_id: int) -> Optional[TicketEntity]:
        model = TicketModel.objects.filter(id=ticket_id).first()
        return self._mapper.to_entity(model) if model else None

    def check_list_ticket_exists(self, ids: Iterable[int]) -> bool:
        unique_ids = set(ids)
        if not unique_ids:
            return False
        return TicketModel.objects.filter(id__in=unique_ids).count() == len(unique_ids)

    def check_if_user_is_creator_of_tickets(
        self, creator_id: int, ids: Iterable[int]
    ) -> bool:
        unique_ids = set(ids)
        if not unique_ids:
            return False
        matches = TicketModel.objects.filter(
            id__in=unique_ids, creator_id=creator_id
        ).count()
        return matches == len(unique_ids)

    # ---------------------------------------------------------------------
    # Atribuições
    # ---------------------------------------------------------------------

    def add_assignment(self, assignment: AssignedTicketEntity) -> int:
        model = AssignedTicketMapper.to_model(assignment)
        model.save(force_insert=True)
        assignment.id = model.id
        return model.id

    def get_assignment_by_id(
        self, assignment_id: int
    ) -> Optional[AssignedTicketEntity]:
        model = AssignedTicketModel.objects.filter(id=assignment_id).first()
        return AssignedTicketMapper.to_entity(model) if model else None

    def get_assignments_for_ticket(
        self, ticket_id: int
    ) -> List[AssignedTicketEntity]:
        models = AssignedTicketModel.objects.filter(ticket_id=ticket_id).order_by('id')
        return [AssignedTicketMapper.to_entity(m) for m in models]

    def update_assignment_status(
        self,
        assignment_id: int,
        status: AssignmentStatus,
        updated_at: datetime,
    ) -> None:
        updated = AssignedTicketModel.objects.filter(id=assignment_id).update(
            status=status.value,
            updated_at=updated_at,
        )
        if not updated:
            raise EntityNotFoundError(
                f"Assignment {assignment_id} not found",
                entity_type="AssignedTicket",
                entity_id=assignment_id,
            )

    # ---------------------------------------------------------------------
    # Projeções
    # ---------------------------------------------------------------------

    def get_tickets_by_creator_id(
        self, creator_id: int
    ) -> List[AssignedTicketDetailDTO]:
        queryset = self._with_assignment_summary(
            TicketModel.objects.filter(creator_id=creator_id),
            first_by='updated_at',
        )
        return [self._to_detail(model) for model in queryset]

    def get_tickets_assigned_to_me(
        self, user_id: int
    ) -> List[ReceivedAssignedTicketDTO]:
        queryset = (
            AssignedTicketModel.objects
            .filter(assignee_id=user_id)
            .select_related('ticket', 'assigner')
            .order_by('id')
        )
        return [
            ReceivedAssignedTicketDTO(
                assignment_id=model.id,
                ticket_id=model.ticket_id,
                name=model.ticket.name,
                description=model.ticket.description,
                file_description=model.ticket.file_description,
                assigner_id=model.assigner_id,
                assigner_name=model.assigner.name,
                time_assign=model.updated_at or timezone.now(),
                status=model.status,
            )
            for model in queryset
        ]

    def get_tickets_assigned_by_me(
        self, user_id: int
    ) -> List[SentAssignedTicketDTO]:
        queryset = (
            AssignedTicketModel.objects
            .filter(assigner_id=user_id)
            .select_related('ticket', 'assignee')
            .order_by('id')
        )
        return [
            SentAssignedTicketDTO(
                ticket_id=model.ticket_id,
                assignment_id=model.id,
                assignee_id=model.assignee_id,
                assignee_name=model.assignee.name,
                name=model.ticket.name,
                description=model.ticket.description,
                file_description=model.ticket.file_description,
                created_at=model.ticket.created_at,
                assigned_at=model.updated_at,
                status=model.status,
            )
            for model in queryset
        ]

    def search_tickets(
        self, user_id: int, name_pattern: str
    ) -> List[AssignedTicketDetailDTO]:
        involved = AssignedTicketModel.objects.filter(ticket=OuterRef('pk')).filter(
            Q(assignee_id=user_id) | Q(assigner_id=user_id)
        )
        queryset = (
            TicketModel.objects
            .filter(name__icontains=name_pattern or '')
            .annotate(is_involved=Exists(involved))
            .filter(Q(creator_id=user_id) | Q(is_involved=True))
        )
        details = [
            self._to_detail(model)
            for model in self._with_assignment_summary(queryset, first_by='created_at')
        ]
        if not details:
            return details

        # Nomes distintos na ordem de criação das atribuições
        assignee_names = defaultdict(list)
        assigner_names = defaultdict(list)
        rows = (
            AssignedTicketModel.objects
            .filter(ticket_id__in=[d.id for d in details])
            .order_by('created_at', 'id')
            .values_list('ticket_id', 'assignee__name', 'assigner__name')
        )
        for ticket_id, assignee_name, assigner_name in rows:
            assignee_names[ticket_id].append(assignee_name)
            assigner_names[ticket_id].append(assigner_name)

        for detail in details:
            detail.assignee_name = join_distinct(assignee_names[detail.id])
            detail.assigner_name = join_distinct(assigner_names[detail.id])
        return details

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------

    @staticmethod
    def _with_assignment_summary(queryset, first_by: str):
        """Anota atribuição mais recente e primeira em cada ticket."""
        assignments = AssignedTicketModel.objects.filter(ticket=OuterRef('pk'))
        latest = assignments.order_by('-updated_at', '-id')
        first = assignments.order_by(first_by, 'id')

        return queryset.annotate(
            latest_assignee_id=Subquery(latest.values('assignee_id')[:1]),
            latest_assignee_name=Subquery(latest.values('assignee__name')[:1]),
            latest_assigner_id=Subquery(latest.values('assigner_id')[:1]),
            latest_assigner_name=Subquery(latest.values('assigner__name')[:1]),
            latest_assigned_at=Subquery(latest.values('updated_at')[:1]),
            latest_status=Subquery(latest.values('status')[:1]),
            first_assignee_id=Subquery(first.values('assignee_id')[:1]),
            first_assignee_name=Subquery(first.values('assignee__name')[:1]),
        ).order_by('id')

    @staticmethod
    def _to_detail(model: TicketModel) -> AssignedTicketDetailDTO:
        return AssignedTicketDetailDTO(
            id=model.id,
            name=model.name,
            description=model.description,
            file_description=model.file_description,
            creator_id=model.creator_id,
            assignee_id=model.latest_assignee_id,
            assignee_name=model.latest_assignee_name,
            assigner_id=model.latest_assigner_id,
            assigner_name=model.latest_assigner_name,
            first_assignee_id=model.first_assignee_id,
            first_assignee_name=model.first_assignee_name,
            assigned_at=model.latest_assigned_at,
            status=model.latest_status,
        )
