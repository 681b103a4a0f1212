"""
Domínio de Tickets.

Tickets criados por usuários e atribuídos a outros usuários, com
histórico de atribuições append-only:
- Entidades (TicketEntity, AssignedTicketEntity, AssignmentStatus)
- Use Cases (comandos e consultas)
- Domain Events
- DTOs (entrada, saída e projeções de leitura)
- Ports (interface do repositório e fake em memória)
"""

from .entities import AssignedTicketEntity, AssignmentStatus, TicketEntity
from .events import (
    AssignmentStatusChangedEvent,
    TicketAssignedEvent,
    TicketCreatedEvent,
    TicketsDeletedEvent,
    TicketUpdatedEvent,
)
from .dtos import (
    AssignedTicketDetailDTO,
    AssignTicketInputDTO,
    ChangeAssignmentStatusInputDTO,
    CreateTicketInputDTO,
    DeleteTicketsInputDTO,
    ReceivedAssignedTicketDTO,
    SearchTicketsQueryDTO,
    SentAssignedTicketDTO,
    TicketOutputDTO,
    UpdateTicketInputDTO,
)
from .ports import InMemoryTicketRepository, TicketRepository
from .use_cases import (
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

__all__ = [
    # Entities
    "TicketEntity",
    "AssignedTicketEntity",
    "AssignmentStatus",
    # Events
    "TicketCreatedEvent",
    "TicketUpdatedEvent",
    "TicketsDeletedEvent",
    "TicketAssignedEvent",
    "AssignmentStatusChangedEvent",
    # DTOs
    "CreateTicketInputDTO",
    "UpdateTicketInputDTO",
    "DeleteTicketsInputDTO",
    "AssignTicketInputDTO",
    "ChangeAssignmentStatusInputDTO",
    "SearchTicketsQueryDTO",
    "TicketOutputDTO",
    "AssignedTicketDetailDTO",
    "ReceivedAssignedTicketDTO",
    "SentAssignedTicketDTO",
    # Ports
    "TicketRepository",
    "InMemoryTicketRepository",
    # Use Cases
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
