"""
Ports (Interfaces) do Domínio de Usuários.

Contratos:
- UserRepository: persistência de usuários
- PasswordHasher: hash salgado e lento de senhas

Implementações:
- DjangoUserRepository / DjangoPasswordHasher (adapters)
- InMemoryUserRepository (testes)
"""

from dataclasses import replace
from typing import Dict, Optional, Protocol, runtime_checkable
import itertools

from .entities import UserEntity, USERNAME_UNIQUE_CONSTRAINT


@runtime_checkable
class UserRepository(Protocol):
    """
    Interface para persistência de Usuários.

    O repositório não valida nem captura erros do store: uma violação
    de unicidade do nome chega ao service como a exceção original.
    """

    def get_user_by_username(self, name: str) -> Optional[UserEntity]:
        """Busca usuário pelo nome (colação padrão do store)."""
        ...

    def get_user_by_id(self, user_id: int) -> Optional[UserEntity]:
        ...

    def create_user(self, user: UserEntity) -> int:
        """
        Persiste novo usuário.

        Returns:
            ID atribuído pelo store
        """
        ...

    def check_user_exists(self, user_id: int) -> bool:
        ...


@runtime_checkable
class PasswordHasher(Protocol):
    """Interface para hash de senhas."""

    def hash(self, password: str) -> str:
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        ...


class DuplicateKeyError(Exception):
    """Erro de unicidade levantado pelo store em memória."""


class InMemoryUserRepository:
    """
    Implementação em memória do UserRepository.

    Reproduz a constraint de unicidade do banco levantando
    DuplicateKeyError com o nome da constraint na mensagem.

    Não usar em produção!
    """

    def __init__(self):
        self._users: Dict[int, UserEntity] = {}
        self._ids = itertools.count(1)

    def get_user_by_username(self, name: str) -> Optional[UserEntity]:
        for user in self._users.values():
            if user.name == name:
                return user
        return None

    def get_user_by_id(self, user_id: int) -> Optional[UserEntity]:
        return self._users.get(user_id)

    def create_user(self, user: UserEntity) -> int:
        if any(u.name == user.name for u in self._users.values()):
            raise DuplicateKeyError(
                f"duplicate key value violates unique constraint "
                f"\"{USERNAME_UNIQUE_CONSTRAINT}\""
            )
        user_id = next(self._ids)
        self._users[user_id] = replace(user, id=user_id)
        user.id = user_id
        return user_id

    def check_user_exists(self, user_id: int) -> bool:
        return user_id in self._users

    def count(self) -> int:
        return len(self._users)

    def clear(self) -> None:
        self._users.clear()
