"""
Shared Domain Components.

Contém componentes compartilhados entre todos os domínios:
- Exceções de domínio
- Result (envelope de resposta)
- Interfaces (Ports)
- Base classes para Domain Events e Services
"""

from .exceptions import (
    DomainException,
    ValidationError,
    EntityNotFoundError,
    ConflictError,
    ForbiddenError,
    BusinessRuleViolationError,
)
from .events import DomainEvent
from .interfaces import UnitOfWork, EventPublisher
from .result import Result, ResponseCode
from .services import BaseService

__all__ = [
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "ConflictError",
    "ForbiddenError",
    "BusinessRuleViolationError",
    "DomainEvent",
    "UnitOfWork",
    "EventPublisher",
    "Result",
    "ResponseCode",
    "BaseService",
]
