"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção automática.

Padrões:
- Singleton: Uma instância para toda app (repositories, publisher)
- Factory: Nova instância por chamada (services, UoW)

Adapters Django são importados apenas quando o provider é chamado,
para que o container possa ser importado antes do django.setup().
"""

from typing import Optional
import importlib

from dependency_injector import containers, providers

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
from src.core.users.use_cases import CreateUserService


def _lazy(path: str):
    """Retorna callable que importa `módulo.Classe` na primeira chamada."""
    module_name, _, attr = path.rpartition('.')

    def factory(*args, **kwargs):
        return getattr(importlib.import_module(module_name), attr)(*args, **kwargs)

    factory.__name__ = attr
    return factory


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: settings (EVENT_PUBLISHER_MODE)
    - Infrastructure: publisher de eventos, hasher de senha
    - Repositories: Persistência
    - Unit of Work: Transações
    - Services: Use Cases

    Example:
        container = get_container()
        service = container.create_user_service()
        result = service.execute(input_dto)
    """

    config = providers.Configuration()

    # =========================================================================
    # Infrastructure
    # =========================================================================

    event_publisher = providers.Singleton(
        _lazy('src.adapters.django_app.events.publishers.get_event_publisher'),
        mode=config.event_publisher_mode,
    )

    password_hasher = providers.Singleton(
        _lazy('src.adapters.django_app.shared.security.DjangoPasswordHasher'),
    )

    # =========================================================================
    # Repositories
    # =========================================================================

    user_repository = providers.Singleton(
        _lazy('src.adapters.django_app.tickets.repositories.DjangoUserRepository'),
    )

    ticket_repository = providers.Singleton(
        _lazy('src.adapters.django_app.tickets.repositories.DjangoTicketRepository'),
    )

    # =========================================================================
    # Unit of Work (nova instância por operação)
    # =========================================================================

    unit_of_work = providers.Factory(
        _lazy('src.adapters.django_app.shared.unit_of_work.DjangoUnitOfWork'),
        event_publisher=event_publisher,
    )

    # =========================================================================
    # Services / Use Cases
    # =========================================================================

    create_user_service = providers.Factory(
        CreateUserService,
        user_repo=user_repository,
        password_hasher=password_hasher,
        uow=unit_of_work,
    )

    create_ticket_service = providers.Factory(
        CreateTicketService,
        ticket_repo=ticket_repository,
        user_repo=user_repository,
        uow=unit_of_work,
    )

    update_ticket_service = providers.Factory(
        UpdateTicketService,
        ticket_repo=ticket_repository,
        uow=unit_of_work,
    )

    delete_tickets_service = providers.Factory(
        DeleteTicketsService,
        ticket_repo=ticket_repository,
        uow=unit_of_work,
    )

    assign_ticket_service = providers.Factory(
        AssignTicketService,
        ticket_repo=ticket_repository,
        user_repo=user_repository,
        uow=unit_of_work,
    )

    change_assignment_status_service = providers.Factory(
        ChangeAssignmentStatusService,
        ticket_repo=ticket_repository,
        uow=unit_of_work,
    )

    # Consultas (sem UoW)
    get_ticket_by_id_service = providers.Factory(
        GetTicketByIdService,
        ticket_repo=ticket_repository,
    )

    get_tickets_by_creator_service = providers.Factory(
        GetTicketsByCreatorService,
        ticket_repo=ticket_repository,
    )

    get_tickets_assigned_to_me_service = providers.Factory(
        GetTicketsAssignedToMeService,
        ticket_repo=ticket_repository,
    )

    get_tickets_assigned_by_me_service = providers.Factory(
        GetTicketsAssignedByMeService,
        ticket_repo=ticket_repository,
    )

    search_tickets_service = providers.Factory(
        SearchTicketsService,
        ticket_repo=ticket_repository,
    )


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir (lazy initialization), lendo o modo do
    publisher de settings.EVENT_PUBLISHER_MODE.
    """
    global _container

    if _container is None:
        from django.conf import settings

        _container = Container()
        _container.config.from_dict({
            'event_publisher_mode': getattr(settings, 'EVENT_PUBLISHER_MODE', 'sync'),
        })

    return _container


def reset_container() -> None:
    """Reset do container (para testes)."""
    global _container
    _container = None


# =============================================================================
# Testing Container
# =============================================================================

def create_testing_container() -> Container:
    """
    Container para testes com implementações InMemory.

    Os providers do Container são sobrescritos (override), então
    os services passam a receber os fakes automaticamente.

    Example:
        container = create_testing_container()
        service = container.create_ticket_service()
        container.unit_of_work()  # InMemoryUnitOfWork
    """
    container = Container()
    container.config.from_dict({'event_publisher_mode': 'sync'})

    container.event_publisher.override(providers.Singleton(
        _lazy('src.adapters.django_app.events.publishers.InMemoryEventPublisher'),
    ))
    container.user_repository.override(providers.Singleton(
        _lazy('src.core.users.ports.InMemoryUserRepository'),
    ))
    container.ticket_repository.override(providers.Singleton(
        _lazy('src.core.tickets.ports.InMemoryTicketRepository'),
        user_repo=container.user_repository,
    ))
    container.unit_of_work.override(providers.Factory(
        _lazy('src.adapters.django_app.shared.unit_of_work.InMemoryUnitOfWork'),
    ))
    return container
