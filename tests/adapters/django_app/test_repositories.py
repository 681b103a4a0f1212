"""
Testes de Integração dos Repositórios Django.

Testa:
- DjangoUserRepository (IDs do banco, constraint de nome)
- DjangoTicketRepository (CRUD, verificações em lote, cascata)
- Projeções: criados, recebidos, enviados e busca
- Desempates por id em timestamps iguais
"""

from datetime import datetime, timedelta, timezone

import pytest
from django.db import IntegrityError, transaction

from src.adapters.django_app.events.publishers import InMemoryEventPublisher
from src.adapters.django_app.shared.security import DjangoPasswordHasher
from src.adapters.django_app.shared.unit_of_work import DjangoUnitOfWork
from src.adapters.django_app.tickets.models import (
    AssignedTicketModel,
    TicketModel,
    UserModel,
)
from src.adapters.django_app.tickets.repositories import (
    DjangoTicketRepository,
    DjangoUserRepository,
)
from src.core.shared.exceptions import EntityNotFoundError
from src.core.shared.result import ResponseCode
from src.core.tickets.entities import (
    AssignedTicketEntity,
    AssignmentStatus,
    TicketEntity,
)
from src.core.users.dtos import CreateUserInputDTO
from src.core.users.entities import UserEntity
from src.core.users.use_cases import CreateUserService, is_unique_name_violation


T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def user_repo():
    return DjangoUserRepository()


@pytest.fixture
def ticket_repo():
    return DjangoTicketRepository()


# =============================================================================
# Users
# =============================================================================

@pytest.mark.django_db
class TestDjangoUserRepository:

    def test_create_user_retorna_id_do_banco(self, user_repo):
        user = UserEntity.create(name="alice", email="a@x.io", password_hash="h")

        user_id = user_repo.create_user(user)

        assert user_id is not None
        assert user.id == user_id
        found = user_repo.get_user_by_username("alice")
        assert found.id == user_id
        assert found.password_hash == "h"

    def test_get_user_inexistente(self, user_repo):
        assert user_repo.get_user_by_username("ghost") is None
        assert user_repo.get_user_by_id(999) is None
        assert user_repo.check_user_exists(999) is False

    def test_nome_duplicado_levanta_integrity_error(self, user_repo):
        user_repo.create_user(UserEntity.create(name="alice", email="", password_hash="h"))

        with pytest.raises(IntegrityError) as exc:
            with transaction.atomic():
                user_repo.create_user(
                    UserEntity.create(name="alice", email="", password_hash="h2")
                )

        assert is_unique_name_violation(exc.value)


class RacingDjangoUserRepository(DjangoUserRepository):
    """Simula outra requisição inserindo o mesmo nome após a checagem prévia."""

    def get_user_by_username(self, name):
        return None


@pytest.mark.django_db
class TestCreateUserNoBanco:

    @pytest.fixture
    def publisher(self):
        return InMemoryEventPublisher()

    @pytest.fixture
    def service(self, publisher):
        return CreateUserService(
            RacingDjangoUserRepository(),
            DjangoPasswordHasher(),
            DjangoUnitOfWork(event_publisher=publisher),
        )

    def test_corrida_de_nome_vira_conflict(self, service, publisher):
        first = service.execute(CreateUserInputDTO(name="alice", email="", password="secret"))
        second = service.execute(CreateUserInputDTO(name="alice", email="", password="other"))

        assert first.code == ResponseCode.SUCCESS
        assert second.code == ResponseCode.CONFLICT
        assert second.message == "User already exists"
        assert UserModel.objects.filter(name="alice").count() == 1
        assert len(publisher.get_events_by_type("UserCreatedEvent")) == 1


# =============================================================================
# Tickets
# =============================================================================

@pytest.mark.django_db
class TestDjangoTicketRepositoryCrud:

    def test_add_e_get_ticket(self, ticket_repo, alice):
        ticket = TicketEntity.create(
            name="Fix bug", description="d", creator_id=alice.id, file_description="log"
        )

        ticket_id = ticket_repo.add_ticket(ticket)

        stored = ticket_repo.get_ticket_by_id(ticket_id)
        assert stored.id == ticket_id
        assert stored.name == "Fix bug"
        assert stored.file_description == "log"
        assert stored.creator_id == alice.id

    def test_update_ticket(self, ticket_repo, alice, ticket_model_factory):
        model = ticket_model_factory(alice, name="Antigo")
        ticket = ticket_repo.get_ticket_by_id(model.id)
        ticket.replace_content(name="Novo", description="nova", file_description=None)

        ticket_repo.update_ticket(ticket)

        model.refresh_from_db()
        assert model.name == "Novo"
        assert model.description == "nova"

    def test_update_ticket_inexistente(self, ticket_repo, alice):
        ticket = TicketEntity.create(name="x", description="", creator_id=alice.id)
        ticket.id = 999
        with pytest.raises(EntityNotFoundError):
            ticket_repo.update_ticket(ticket)

    def test_check_list_ticket_exists(self, ticket_repo, alice, ticket_model_factory):
        a = ticket_model_factory(alice).id
        b = ticket_model_factory(alice).id

        assert ticket_repo.check_list_ticket_exists([]) is False
        assert ticket_repo.check_list_ticket_exists([a, b]) is True
        assert ticket_repo.check_list_ticket_exists([a, a, b]) is True
        assert ticket_repo.check_list_ticket_exists([a, 999]) is False

    def test_check_if_user_is_creator(self, ticket_repo, alice, bob, ticket_model_factory):
        mine = ticket_model_factory(alice).id
        theirs = ticket_model_factory(bob).id

        assert ticket_repo.check_if_user_is_creator_of_tickets(alice.id, []) is False
        assert ticket_repo.check_if_user_is_creator_of_tickets(alice.id, [mine, mine]) is True
        assert ticket_repo.check_if_user_is_creator_of_tickets(alice.id, [mine, theirs]) is False

    def test_delete_idempotente_e_em_cascata(
        self, ticket_repo, alice, bob, ticket_model_factory, assignment_model_factory
    ):
        ticket = ticket_model_factory(alice)
        keep = ticket_model_factory(alice)
        assignment_model_factory(ticket, bob, alice)

        ticket_repo.delete_tickets_by_id([ticket.id])
        ticket_repo.delete_tickets_by_id([ticket.id])

        assert not TicketModel.objects.filter(id=ticket.id).exists()
        assert TicketModel.objects.filter(id=keep.id).exists()
        assert AssignedTicketModel.objects.count() == 0


@pytest.mark.django_db
class TestDjangoAssignments:

    def test_add_assignment_e_update_status(self, ticket_repo, alice, bob, ticket_model_factory):
        ticket = ticket_model_factory(alice)
        assignment = AssignedTicketEntity.create(
            ticket_id=ticket.id, assignee_id=bob.id, assigner_id=alice.id
        )

        assignment_id = ticket_repo.add_assignment(assignment)
        ticket_repo.update_assignment_status(assignment_id, AssignmentStatus.DONE, T0)

        stored = ticket_repo.get_assignment_by_id(assignment_id)
        assert stored.status == AssignmentStatus.DONE
        assert stored.updated_at == T0
        assert [a.id for a in ticket_repo.get_assignments_for_ticket(ticket.id)] == [assignment_id]

    def test_update_status_inexistente(self, ticket_repo):
        with pytest.raises(EntityNotFoundError):
            ticket_repo.update_assignment_status(999, AssignmentStatus.DONE, T0)


# =============================================================================
# Projeções
# =============================================================================

@pytest.mark.django_db
class TestGetTicketsByCreatorId:

    def test_cenario_criacao_e_atribuicao(
        self, ticket_repo, user_model_factory, ticket_model_factory, assignment_model_factory
    ):
        alice = user_model_factory('alice', id=7)
        nine = user_model_factory('nine', id=9)
        ticket = ticket_model_factory(alice, id=42, name='Fix bug')
        assignment_model_factory(ticket, nine, alice)

        rows = ticket_repo.get_tickets_by_creator_id(7)

        assert len(rows) == 1
        row = rows[0]
        assert (row.id, row.assignee_id, row.assigner_id, row.status) == (42, 9, 7, 'Pending')
        assert row.assignee_name == 'nine'
        assert row.assigner_name == 'alice'

    def test_ticket_sem_atribuicao(self, ticket_repo, alice, ticket_model_factory):
        ticket_model_factory(alice)

        row = ticket_repo.get_tickets_by_creator_id(alice.id)[0]

        assert row.assignee_id is None
        assert row.assigner_id is None
        assert row.first_assignee_id is None
        assert row.status is None

    def test_reatribuido_tres_vezes(
        self, ticket_repo, alice, bob, carol, user_model_factory,
        ticket_model_factory, assignment_model_factory,
    ):
        dave = user_model_factory('dave')
        ticket = ticket_model_factory(alice)
        # ordem de inserção diferente da ordem temporal
        assignment_model_factory(ticket, carol, alice, updated_at=T0 + timedelta(hours=2))
        assignment_model_factory(ticket, bob, alice, updated_at=T0)
        assignment_model_factory(ticket, dave, carol, updated_at=T0 + timedelta(hours=3))

        row = ticket_repo.get_tickets_by_creator_id(alice.id)[0]

        assert row.assignee_id == dave.id
        assert row.assigner_id == carol.id
        assert row.assigned_at == T0 + timedelta(hours=3)
        assert row.first_assignee_id == bob.id
        assert row.first_assignee_name == 'bob'

    def test_empate_usa_id(
        self, ticket_repo, alice, bob, carol, ticket_model_factory, assignment_model_factory
    ):
        ticket = ticket_model_factory(alice)
        assignment_model_factory(ticket, bob, alice, updated_at=T0)
        assignment_model_factory(ticket, carol, alice, updated_at=T0)

        row = ticket_repo.get_tickets_by_creator_id(alice.id)[0]

        assert row.assignee_id == carol.id
        assert row.first_assignee_id == bob.id


@pytest.mark.django_db
class TestAssignedProjections:

    def test_assigned_to_me(
        self, ticket_repo, alice, bob, carol, ticket_model_factory, assignment_model_factory
    ):
        ticket = ticket_model_factory(alice, name='Fix bug', file_description='log')
        first = assignment_model_factory(ticket, bob, alice)
        assignment_model_factory(ticket, carol, bob)
        again = assignment_model_factory(ticket, bob, carol, status='InProgress')

        rows = ticket_repo.get_tickets_assigned_to_me(bob.id)

        assert [r.assignment_id for r in rows] == [first.id, again.id]
        assert rows[0].assigner_name == 'alice'
        assert rows[1].assigner_name == 'carol'
        assert rows[1].status == 'InProgress'
        assert rows[0].file_description == 'log'

    def test_assigned_by_me(
        self, ticket_repo, alice, bob, ticket_model_factory, assignment_model_factory
    ):
        ticket = ticket_model_factory(alice, name='Fix bug')
        assignment = assignment_model_factory(ticket, bob, alice, updated_at=T0)

        rows = ticket_repo.get_tickets_assigned_by_me(alice.id)

        assert len(rows) == 1
        row = rows[0]
        assert row.assignment_id == assignment.id
        assert row.assignee_name == 'bob'
        assert row.assigned_at == T0
        assert row.created_at == ticket.created_at
        assert ticket_repo.get_tickets_assigned_by_me(bob.id) == []


@pytest.mark.django_db
class TestSearchTickets:

    def test_substring_sem_diferenciar_maiusculas(self, ticket_repo, alice, ticket_model_factory):
        ticket_model_factory(alice, name='MyTicket1')
        ticket_model_factory(alice, name='Other')

        rows = ticket_repo.search_tickets(alice.id, 'tick')

        assert [r.name for r in rows] == ['MyTicket1']

    def test_visibilidade(
        self, ticket_repo, alice, bob, carol, user_model_factory,
        ticket_model_factory, assignment_model_factory,
    ):
        dave = user_model_factory('dave')
        ticket = ticket_model_factory(alice, name='Fix bug')
        assignment_model_factory(ticket, bob, alice)
        assignment_model_factory(ticket, carol, bob)

        for user in (alice, bob, carol):
            assert [r.id for r in ticket_repo.search_tickets(user.id, '')] == [ticket.id]
        assert ticket_repo.search_tickets(dave.id, '') == []

    def test_nomes_distintos_em_ordem_de_criacao(
        self, ticket_repo, alice, bob, carol, ticket_model_factory, assignment_model_factory
    ):
        ticket = ticket_model_factory(alice, name='Fix bug')
        assignment_model_factory(ticket, bob, alice, created_at=T0, updated_at=T0)
        assignment_model_factory(
            ticket, carol, bob,
            created_at=T0 + timedelta(hours=1), updated_at=T0 + timedelta(hours=1),
        )
        assignment_model_factory(
            ticket, bob, carol,
            created_at=T0 + timedelta(hours=2), updated_at=T0 + timedelta(hours=2),
        )

        row = ticket_repo.search_tickets(alice.id, 'fix')[0]

        assert row.assignee_name == 'bob, carol'
        assert row.assigner_name == 'alice, bob, carol'
        assert row.assignee_id == bob.id
        assert row.first_assignee_id == bob.id
