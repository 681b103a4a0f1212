"""
Data Transfer Objects (DTOs) do Domínio de Usuários.
"""

from dataclasses import dataclass
from typing import Optional


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ""


@dataclass(frozen=True)
class CreateUserInputDTO:
    """
    DTO de entrada para criar usuário.

    Normaliza os campos na construção: None vira string vazia e
    espaços nas pontas são removidos. A obrigatoriedade de `name` e
    `password` é verificada pelo CreateUserService, que rejeita
    valores vazios após o trim.

    Attributes:
        name: Nome de usuário (obrigatório)
        email: Email (opcional)
        password: Senha em texto puro (obrigatória)
    """

    name: str
    email: str
    password: str

    def __post_init__(self):
        # frozen=True: normalização via object.__setattr__
        object.__setattr__(self, "name", _clean(self.name))
        object.__setattr__(self, "email", _clean(self.email))
        object.__setattr__(self, "password", _clean(self.password))

    def __repr__(self) -> str:
        return f"CreateUserInputDTO(name={self.name!r}, email={self.email!r})"
