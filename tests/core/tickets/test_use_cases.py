"""
Testes Unitários para Use Cases do Domínio de Tickets.

Testa os serviços de aplicação (use cases) que orquestram
a lógica de negócio do domínio de tickets.

Estratégia de Teste:
- Usa InMemoryTicketRepository / InMemoryUserRepository (fakes)
- Usa FakeUnitOfWork para testar transações
- Verifica eventos publicados
- Testa cenários de sucesso e erro

Coverage:
- CreateTicketService / UpdateTicketService / DeleteTicketsService
- AssignTicketService / ChangeAssignmentStatusService
- Consultas: por ID, criados, recebidos, enviados e busca
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.core.shared.result import ResponseCode
from src.core.tickets.dtos import (
    AssignTicketInputDTO,
    ChangeAssignmentStatusInputDTO,
    CreateTicketInputDTO,
    DeleteTicketsInputDTO,
    SearchTicketsQueryDTO,
    UpdateTicketInputDTO,
)
from src.core.tickets.entities import AssignedTicketEntity, AssignmentStatus
from src.core.tickets.events import (
    AssignmentStatusChangedEvent,
    TicketAssignedEvent,
    TicketCreatedEvent,
    TicketsDeletedEvent,
    TicketUpdatedEvent,
)
from src.core.tickets.use_cases import (
    AssignTicketService,
    ChangeAssignmentStatusService,
    CreateTicketService,
    DeleteTicketsService,
    GetTicketByIdService,
    GetTicketsAssignedByMeService,
    GetTicketsAssignedToMeService,
    GetTicketsByCreatorService,
    SearchTicketsService,
    UpdateTicketService,
)


@pytest.fixture
def users(make_user):
    """Usuários alice, bob e carol → IDs."""
    return {name: make_user(name) for name in ("alice", "bob", "carol")}


@pytest.fixture
def create_ticket(ticket_repo, user_repo, uow):
    def create(creator_id, name="Fix bug", description="Login quebrado", **kwargs):
        result = CreateTicketService(ticket_repo, user_repo, uow).execute(
            CreateTicketInputDTO(
                name=name, description=description, creator_id=creator_id, **kwargs
            )
        )
        assert result.is_success, result.message
        return result.data

    return create


@pytest.fixture
def assign(ticket_repo, user_repo, uow):
    def run(ticket_id, assignee_id, assigner_id):
        return AssignTicketService(ticket_repo, user_repo, uow).execute(
            AssignTicketInputDTO(
                ticket_id=ticket_id, assignee_id=assignee_id, assigner_id=assigner_id
            )
        )

    return run


# =============================================================================
# COMANDOS
# =============================================================================

class TestCreateTicketService:

    def test_create_ticket_sucesso(self, ticket_repo, user_repo, uow, users):
        service = CreateTicketService(ticket_repo, user_repo, uow)

        result = service.execute(
            CreateTicketInputDTO(
                name="Fix bug",
                description="Login quebrado",
                creator_id=users["alice"],
                file_description="screenshot.png",
            )
        )

        assert result.is_success
        assert result.http_status == 201
        assert result.message == "Ticket Created Successfully"
        stored = ticket_repo.get_ticket_by_id(result.data)
        assert stored.name == "Fix bug"
        assert stored.creator_id == users["alice"]
        assert stored.file_description == "screenshot.png"

    def test_create_ticket_publica_evento(self, create_ticket, uow, users):
        ticket_id = create_ticket(users["alice"])

        event = uow.published[-1]
        assert isinstance(event, TicketCreatedEvent)
        assert event.aggregate_id == str(ticket_id)
        assert event.creator_id == users["alice"]

    def test_create_ticket_nome_vazio(self, ticket_repo, user_repo, uow, users):
        result = CreateTicketService(ticket_repo, user_repo, uow).execute(
            CreateTicketInputDTO(name="  ", description="", creator_id=users["alice"])
        )

        assert result.code == ResponseCode.VALIDATION_ERROR
        assert ticket_repo.count() == 0
        assert uow.published == []

    def test_create_ticket_criador_inexistente(self, ticket_repo, user_repo, uow):
        result = CreateTicketService(ticket_repo, user_repo, uow).execute(
            CreateTicketInputDTO(name="Fix bug", description="", creator_id=999)
        )

        assert result.code == ResponseCode.NOT_FOUND
        assert result.http_status == 404
        assert ticket_repo.count() == 0


class TestUpdateTicketService:

    def test_update_ticket_sucesso(self, ticket_repo, uow, users, create_ticket):
        ticket_id = create_ticket(users["alice"], file_description="log.txt")

        result = UpdateTicketService(ticket_repo, uow).execute(
            UpdateTicketInputDTO(
                ticket_id=ticket_id,
                caller_id=users["alice"],
                name="Fix login bug",
                description="Detalhes",
            )
        )

        assert result.is_success
        assert result.message == "Ticket Updated Successfully"
        assert result.data["name"] == "Fix login bug"
        assert result.data["file_description"] is None
        stored = ticket_repo.get_ticket_by_id(ticket_id)
        assert stored.name == "Fix login bug"
        assert stored.description == "Detalhes"
        assert isinstance(uow.published[-1], TicketUpdatedEvent)

    def test_update_ticket_inexistente(self, ticket_repo, uow, users):
        result = UpdateTicketService(ticket_repo, uow).execute(
            UpdateTicketInputDTO(ticket_id=42, caller_id=users["alice"], name="x")
        )
        assert result.code == ResponseCode.NOT_FOUND

    def test_update_ticket_apenas_criador(self, ticket_repo, uow, users, create_ticket):
        ticket_id = create_ticket(users["alice"])

        result = UpdateTicketService(ticket_repo, uow).execute(
            UpdateTicketInputDTO(ticket_id=ticket_id, caller_id=users["bob"], name="Hack")
        )

        assert result.code == ResponseCode.FORBIDDEN
        assert result.http_status == 403
        assert ticket_repo.get_ticket_by_id(ticket_id).name == "Fix bug"

    def test_update_ticket_nome_vazio(self, ticket_repo, uow, users, create_ticket):
        ticket_id = create_ticket(users["alice"])

        result = UpdateTicketService(ticket_repo, uow).execute(
            UpdateTicketInputDTO(ticket_id=ticket_id, caller_id=users["alice"], name="")
        )

        assert result.code == ResponseCode.VALIDATION_ERROR
        assert ticket_repo.get_ticket_by_id(ticket_id).name == "Fix bug"


class TestDeleteTicketsService:

    def test_delete_tickets_sucesso(self, ticket_repo, uow, users, create_ticket, assign):
        first = create_ticket(users["alice"], name="A")
        second = create_ticket(users["alice"], name="B")
        assign(first, users["bob"], users["alice"])

        result = DeleteTicketsService(ticket_repo, uow).execute(
            DeleteTicketsInputDTO(ids=(second, first, first), caller_id=users["alice"])
        )

        assert result.is_success
        assert result.data == [first, second]
        assert ticket_repo.count() == 0
        # atribuições removidas em cascata
        assert ticket_repo.get_tickets_assigned_to_me(users["bob"]) == []
        event = uow.published[-1]
        assert isinstance(event, TicketsDeletedEvent)
        assert event.ticket_ids == [first, second]

    def test_delete_lista_vazia(self, ticket_repo, uow, users):
        result = DeleteTicketsService(ticket_repo, uow).execute(
            DeleteTicketsInputDTO(ids=(), caller_id=users["alice"])
        )
        assert result.code == ResponseCode.VALIDATION_ERROR

    def test_delete_id_inexistente_nada_excluido(self, ticket_repo, uow, users, create_ticket):
        ticket_id = create_ticket(users["alice"])

        result = DeleteTicketsService(ticket_repo, uow).execute(
            DeleteTicketsInputDTO(ids=(ticket_id, 999), caller_id=users["alice"])
        )

        assert result.code == ResponseCode.NOT_FOUND
        assert ticket_repo.count() == 1

    def test_delete_ticket_de_outro_usuario_nada_excluido(
        self, ticket_repo, uow, users, create_ticket
    ):
        mine = create_ticket(users["alice"], name="A")
        theirs = create_ticket(users["bob"], name="B")
        published_before = len(uow.published)

        result = DeleteTicketsService(ticket_repo, uow).execute(
            DeleteTicketsInputDTO(ids=(mine, theirs), caller_id=users["alice"])
        )

        assert result.code == ResponseCode.FORBIDDEN
        assert ticket_repo.count() == 2
        assert len(uow.published) == published_before


class TestAssignTicketService:

    def test_assign_ticket_sucesso(self, ticket_repo, uow, users, create_ticket, assign):
        ticket_id = create_ticket(users["alice"])

        result = assign(ticket_id, users["bob"], users["alice"])

        assert result.is_success
        assert result.http_status == 201
        assert result.message == "Ticket Assigned Successfully"
        assignment = ticket_repo.get_assignment_by_id(result.data)
        assert assignment.status == AssignmentStatus.PENDING
        assert assignment.assignee_id == users["bob"]
        assert assignment.assigner_id == users["alice"]

    def test_assign_publica_evento_com_responsavel_anterior(
        self, uow, users, create_ticket, assign
    ):
        ticket_id = create_ticket(users["alice"])
        assign(ticket_id, users["bob"], users["alice"])
        assign(ticket_id, users["carol"], users["alice"])

        event = uow.published[-1]
        assert isinstance(event, TicketAssignedEvent)
        assert event.assignee_id == users["carol"]
        assert event.previous_assignee_id == users["bob"]

    def test_reatribuicao_cria_novo_registro(self, ticket_repo, users, create_ticket, assign):
        ticket_id = create_ticket(users["alice"])
        assign(ticket_id, users["bob"], users["alice"])
        assign(ticket_id, users["carol"], users["bob"])

        assert len(ticket_repo.get_assignments_for_ticket(ticket_id)) == 2

    def test_assign_ticket_inexistente(self, users, assign):
        result = assign(999, users["bob"], users["alice"])
        assert result.code == ResponseCode.NOT_FOUND

    def test_assign_responsavel_inexistente(self, users, create_ticket, assign):
        ticket_id = create_ticket(users["alice"])
        result = assign(ticket_id, 999, users["alice"])
        assert result.code == ResponseCode.NOT_FOUND

    def test_assign_por_terceiro_proibido(self, ticket_repo, users, create_ticket, assign):
        ticket_id = create_ticket(users["alice"])

        result = assign(ticket_id, users["carol"], users["bob"])

        assert result.code == ResponseCode.FORBIDDEN
        assert ticket_repo.get_assignments_for_ticket(ticket_id) == []

    def test_assign_ao_responsavel_atual(self, ticket_repo, users, create_ticket, assign):
        ticket_id = create_ticket(users["alice"])
        assign(ticket_id, users["bob"], users["alice"])

        result = assign(ticket_id, users["bob"], users["alice"])

        assert result.code == ResponseCode.UNPROCESSABLE
        assert result.http_status == 422
        assert len(ticket_repo.get_assignments_for_ticket(ticket_id)) == 1


class TestChangeAssignmentStatusService:

    @pytest.fixture
    def assignment_id(self, users, create_ticket, assign):
        ticket_id = create_ticket(users["alice"])
        return assign(ticket_id, users["bob"], users["alice"]).data

    def test_change_status_sucesso(self, ticket_repo, uow, users, assignment_id):
        result = ChangeAssignmentStatusService(ticket_repo, uow).execute(
            ChangeAssignmentStatusInputDTO(
                assignment_id=assignment_id, status="InProgress", caller_id=users["bob"]
            )
        )

        assert result.is_success
        assert result.data == {"assignment_id": assignment_id, "status": "InProgress"}
        assert ticket_repo.get_assignment_by_id(assignment_id).status == AssignmentStatus.IN_PROGRESS
        event = uow.published[-1]
        assert isinstance(event, AssignmentStatusChangedEvent)
        assert event.previous_status == "Pending"
        assert event.assigner_id == users["alice"]

    def test_change_status_invalido(self, ticket_repo, uow, users, assignment_id):
        result = ChangeAssignmentStatusService(ticket_repo, uow).execute(
            ChangeAssignmentStatusInputDTO(
                assignment_id=assignment_id, status="Closed", caller_id=users["bob"]
            )
        )
        assert result.code == ResponseCode.VALIDATION_ERROR

    def test_change_status_atribuicao_inexistente(self, ticket_repo, uow, users):
        result = ChangeAssignmentStatusService(ticket_repo, uow).execute(
            ChangeAssignmentStatusInputDTO(assignment_id=999, status="Done", caller_id=users["bob"])
        )
        assert result.code == ResponseCode.NOT_FOUND

    def test_change_status_apenas_responsavel(self, ticket_repo, uow, users, assignment_id):
        result = ChangeAssignmentStatusService(ticket_repo, uow).execute(
            ChangeAssignmentStatusInputDTO(
                assignment_id=assignment_id, status="Done", caller_id=users["alice"]
            )
        )

        assert result.code == ResponseCode.FORBIDDEN
        assert ticket_repo.get_assignment_by_id(assignment_id).status == AssignmentStatus.PENDING

    def test_change_status_registro_substituido(
        self, ticket_repo, uow, users, create_ticket, assign, make_user
    ):
        ticket_id = create_ticket(users["alice"])
        old_id = assign(ticket_id, users["bob"], users["alice"]).data
        assign(ticket_id, users["carol"], users["alice"])

        result = ChangeAssignmentStatusService(ticket_repo, uow).execute(
            ChangeAssignmentStatusInputDTO(
                assignment_id=old_id, status="Done", caller_id=users["bob"]
            )
        )

        assert result.code == ResponseCode.UNPROCESSABLE
        assert result.http_status == 422
        assert ticket_repo.get_assignment_by_id(old_id).status == AssignmentStatus.PENDING

        row = GetTicketsByCreatorService(ticket_repo).execute(users["alice"]).data[0]
        assert row["assignee_name"] == "carol"
        assert row["first_assignee_name"] == "bob"

        reassigned = assign(ticket_id, make_user("dave"), users["bob"])
        assert reassigned.code == ResponseCode.FORBIDDEN


# =============================================================================
# CONSULTAS
# =============================================================================

class TestGetTicketByIdService:

    def test_get_ticket_existente(self, ticket_repo, users, create_ticket):
        ticket_id = create_ticket(users["alice"])

        result = GetTicketByIdService(ticket_repo).execute(ticket_id)

        assert result.is_success
        assert result.data["id"] == ticket_id
        assert result.data["creator_id"] == users["alice"]

    def test_get_ticket_inexistente(self, ticket_repo):
        result = GetTicketByIdService(ticket_repo).execute(999)
        assert result.code == ResponseCode.NOT_FOUND


class TestGetTicketsByCreatorService:

    def test_ticket_sem_atribuicao(self, ticket_repo, users, create_ticket):
        create_ticket(users["alice"])

        rows = GetTicketsByCreatorService(ticket_repo).execute(users["alice"]).data

        assert len(rows) == 1
        assert rows[0]["assignee_id"] is None
        assert rows[0]["status"] is None
        assert rows[0]["first_assignee_id"] is None

    def test_atribuicao_mais_recente_e_primeira(self, ticket_repo, users, create_ticket, assign):
        ticket_id = create_ticket(users["alice"])
        assign(ticket_id, users["bob"], users["alice"])
        assign(ticket_id, users["carol"], users["bob"])

        row = GetTicketsByCreatorService(ticket_repo).execute(users["alice"]).data[0]

        assert row["assignee_id"] == users["carol"]
        assert row["assignee_name"] == "carol"
        assert row["assigner_id"] == users["bob"]
        assert row["assigner_name"] == "bob"
        assert row["first_assignee_id"] == users["bob"]
        assert row["first_assignee_name"] == "bob"
        assert row["status"] == "Pending"

    def test_apenas_tickets_do_criador(self, ticket_repo, users, create_ticket):
        create_ticket(users["alice"], name="A")
        create_ticket(users["bob"], name="B")

        rows = GetTicketsByCreatorService(ticket_repo).execute(users["alice"]).data

        assert [r["name"] for r in rows] == ["A"]

    def test_empate_de_updated_at_vence_maior_id(self, ticket_repo, users, create_ticket):
        ticket_id = create_ticket(users["alice"])
        same_time = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for assignee in ("bob", "carol"):
            ticket_repo.add_assignment(AssignedTicketEntity(
                ticket_id=ticket_id,
                assignee_id=users[assignee],
                assigner_id=users["alice"],
                created_at=same_time,
                updated_at=same_time,
            ))

        row = GetTicketsByCreatorService(ticket_repo).execute(users["alice"]).data[0]

        assert row["assignee_name"] == "carol"
        assert row["first_assignee_name"] == "bob"


class TestAssignedQueries:

    def test_assigned_to_me_uma_linha_por_registro(
        self, ticket_repo, users, create_ticket, assign
    ):
        ticket_id = create_ticket(users["alice"])
        assign(ticket_id, users["bob"], users["alice"])
        assign(ticket_id, users["carol"], users["alice"])
        assign(ticket_id, users["bob"], users["carol"])

        rows = GetTicketsAssignedToMeService(ticket_repo).execute(users["bob"]).data

        assert len(rows) == 2
        assert [r["assigner_name"] for r in rows] == ["alice", "carol"]
        assert all(r["ticket_id"] == ticket_id for r in rows)
        assert rows[0]["status"] == "Pending"
        assert rows[0]["time_assign"] is not None

    def test_assigned_by_me(self, ticket_repo, users, create_ticket, assign):
        first = create_ticket(users["alice"], name="A")
        second = create_ticket(users["alice"], name="B")
        assign(first, users["bob"], users["alice"])
        assign(second, users["carol"], users["alice"])

        rows = GetTicketsAssignedByMeService(ticket_repo).execute(users["alice"]).data

        assert [(r["name"], r["assignee_name"]) for r in rows] == [("A", "bob"), ("B", "carol")]
        assert rows[0]["created_at"] is not None

    def test_sem_atribuicoes(self, ticket_repo, users):
        assert GetTicketsAssignedToMeService(ticket_repo).execute(users["bob"]).data == []
        assert GetTicketsAssignedByMeService(ticket_repo).execute(users["bob"]).data == []


class TestSearchTicketsService:

    def _search(self, ticket_repo, user_id, pattern=""):
        return SearchTicketsService(ticket_repo).execute(
            SearchTicketsQueryDTO(user_id=user_id, name_pattern=pattern)
        ).data

    def test_busca_sem_diferenciar_maiusculas(self, ticket_repo, users, create_ticket):
        create_ticket(users["alice"], name="Fix LOGIN bug")
        create_ticket(users["alice"], name="Dark mode")

        rows = self._search(ticket_repo, users["alice"], "  login ")

        assert [r["name"] for r in rows] == ["Fix LOGIN bug"]

    def test_padrao_vazio_retorna_todos_visiveis(self, ticket_repo, users, create_ticket):
        create_ticket(users["alice"], name="A")
        create_ticket(users["alice"], name="B")
        create_ticket(users["bob"], name="C")

        assert [r["name"] for r in self._search(ticket_repo, users["alice"])] == ["A", "B"]

    def test_visivel_para_responsavel_e_atribuidor(
        self, ticket_repo, users, create_ticket, assign
    ):
        ticket_id = create_ticket(users["alice"])
        assign(ticket_id, users["bob"], users["alice"])
        assign(ticket_id, users["carol"], users["bob"])

        for name in ("alice", "bob", "carol"):
            assert len(self._search(ticket_repo, users[name], "fix")) == 1

    def test_nao_envolvido_nao_enxerga(self, ticket_repo, users, create_ticket, make_user):
        create_ticket(users["alice"])
        dave = make_user("dave")

        assert self._search(ticket_repo, dave, "fix") == []

    def test_nomes_distintos_juntos(self, ticket_repo, users, create_ticket, assign):
        ticket_id = create_ticket(users["alice"])
        assign(ticket_id, users["bob"], users["alice"])
        assign(ticket_id, users["carol"], users["bob"])
        assign(ticket_id, users["bob"], users["carol"])

        row = self._search(ticket_repo, users["alice"], "fix")[0]

        assert row["assignee_name"] == "bob, carol"
        assert row["assigner_name"] == "alice, bob, carol"
        assert row["first_assignee_name"] == "bob"


class TestJoinDistinct:

    def test_join_distinct(self):
        from src.core.tickets.ports import join_distinct

        assert join_distinct(["bob", None, "carol", "bob"]) == "bob, carol"
        assert join_distinct([]) is None
