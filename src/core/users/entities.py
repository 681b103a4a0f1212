"""
Entidades do Domínio de Usuários.

Entidades:
- UserEntity: usuário que cria, atribui e recebe tickets

Invariantes:
- Nome (username) é obrigatório e único no store
- Senha nunca é armazenada em texto puro, apenas o hash
- ID é atribuído pelo store (autoincrement) na persistência
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import ClassVar, Optional

from src.core.shared.exceptions import ValidationError


# Nome da constraint de unicidade no banco; usado para reconhecer
# a violação quando duas criações concorrentes disputam o mesmo nome
USERNAME_UNIQUE_CONSTRAINT = "uq_users_name"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class UserEntity:
    """
    Entidade de Domínio: Usuário.

    Attributes:
        id: Identificador (None até ser persistido)
        name: Nome de usuário único
        email: Email de contato (pode ser vazio)
        password_hash: Hash salgado da senha
        created_at: Data/hora de criação
        updated_at: Data/hora da última atualização
        avatar_url: URL do avatar (vazio quando não definido)
    """

    id: Optional[int] = None
    name: str = ""
    email: str = ""
    password_hash: str = ""
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    avatar_url: str = ""

    NAME_MAX_LENGTH: ClassVar[int] = 100
    AVATAR_URL_MAX_LENGTH: ClassVar[int] = 100

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        password_hash: str,
        now: Optional[datetime] = None,
    ) -> "UserEntity":
        """
        Factory method para criar usuário validado.

        Args:
            name: Nome já normalizado (trim)
            email: Email já normalizado
            password_hash: Hash produzido pelo PasswordHasher
            now: Momento da criação (default: agora, UTC)

        Raises:
            ValidationError: Se nome vazio ou longo demais
        """
        if not name:
            raise ValidationError("Name is required", field="name")
        if len(name) > cls.NAME_MAX_LENGTH:
            raise ValidationError(
                f"Name must be at most {cls.NAME_MAX_LENGTH} characters",
                field="name",
            )

        now = now or utcnow()
        return cls(
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

    def __repr__(self) -> str:
        return f"UserEntity(id={self.id}, name={self.name!r})"
