"""
Domain Events do Domínio de Usuários.
"""

from dataclasses import dataclass

from src.core.shared.events import DomainEvent


@dataclass
class UserCreatedEvent(DomainEvent):
    """
    Evento: Usuário foi criado.

    Attributes:
        name: Nome de usuário
        email: Email informado no cadastro
    """

    name: str = ""
    email: str = ""

    @property
    def aggregate_type(self) -> str:
        return "User"
