"""
Domínio de Usuários.

Cadastro de usuários que criam, atribuem e recebem tickets.
"""

from .entities import UserEntity, USERNAME_UNIQUE_CONSTRAINT
from .dtos import CreateUserInputDTO
from .events import UserCreatedEvent
from .ports import UserRepository, PasswordHasher, InMemoryUserRepository
from .use_cases import CreateUserService

__all__ = [
    "UserEntity",
    "USERNAME_UNIQUE_CONSTRAINT",
    "CreateUserInputDTO",
    "UserCreatedEvent",
    "UserRepository",
    "PasswordHasher",
    "InMemoryUserRepository",
    "CreateUserService",
]
