"""
Fixtures dos testes do Core.

Estratégia:
- Repositórios InMemory (fakes) para isolamento
- FakeUnitOfWork para verificar commit/rollback e eventos
- FakePasswordHasher para não depender do Django
"""

from typing import List

import pytest

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import UnitOfWork
from src.core.tickets.ports import InMemoryTicketRepository
from src.core.users.entities import UserEntity
from src.core.users.ports import InMemoryUserRepository


class FakeUnitOfWork(UnitOfWork):
    """
    Fake Unit of Work para testes.

    Permite testar:
    - Comportamento de commit/rollback
    - Eventos publicados (apenas após commit)
    """

    def __init__(self):
        super().__init__()
        self.published: List[DomainEvent] = []
        self.commits = 0
        self.rollbacks = 0

    def _begin_transaction(self):
        pass

    def commit(self):
        self.commits += 1
        self.published.extend(self._events)
        self.clear_events()

    def rollback(self):
        self.rollbacks += 1
        self.clear_events()

    @property
    def committed(self) -> bool:
        return self.commits > 0


class FakePasswordHasher:
    """Hasher reversível, apenas para testes."""

    def hash(self, password: str) -> str:
        return f"fake${password[::-1]}"

    def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == self.hash(password)


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def ticket_repo(user_repo):
    """Repositório de tickets que resolve nomes pelo user_repo."""
    return InMemoryTicketRepository(user_repo=user_repo)


@pytest.fixture
def uow():
    return FakeUnitOfWork()


@pytest.fixture
def password_hasher():
    return FakePasswordHasher()


@pytest.fixture
def make_user(user_repo):
    """Factory: cria usuário direto no repositório e retorna o ID."""

    def create(name: str) -> int:
        return user_repo.create_user(
            UserEntity.create(name=name, email=f"{name}@example.com", password_hash="x")
        )

    return create
