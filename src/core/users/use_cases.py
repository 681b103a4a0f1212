"""
Use Cases (Application Services) do Domínio de Usuários.

Use Cases implementados:
- CreateUserService: Cadastra novo usuário

Fluxo de CreateUserService:
1. Validar campos obrigatórios (após trim)
2. Verificar nome duplicado (saída antecipada)
3. Gerar hash da senha
4. Persistir em transação (ID atribuído pelo store)
5. Publicar UserCreatedEvent após commit

A verificação do passo 2 não é suficiente sob concorrência: duas
requisições podem passar por ela ao mesmo tempo. A constraint do
banco é a verificação autoritativa, e a violação é traduzida para
Conflict em `_translate_error()`.
"""

import logging

from src.core.shared.exceptions import ValidationError, ConflictError
from src.core.shared.interfaces import UnitOfWork
from src.core.shared.result import Result, ResponseCode
from src.core.shared.services import BaseService

from .dtos import CreateUserInputDTO
from .entities import UserEntity, USERNAME_UNIQUE_CONSTRAINT
from .events import UserCreatedEvent
from .ports import UserRepository, PasswordHasher

logger = logging.getLogger(__name__)

USER_EXISTS_MESSAGE = "User already exists"
USER_CREATED_MESSAGE = "User Created Successfully"

# Assinaturas de violação da constraint de nome nos backends suportados:
# PostgreSQL cita a constraint entre aspas; SQLite cita exatamente tabela.coluna
_CONSTRAINT_SIGNATURE = f'"{USERNAME_UNIQUE_CONSTRAINT}"'
_SQLITE_SIGNATURE = "UNIQUE constraint failed: users.name"


def is_unique_name_violation(error: Exception) -> bool:
    """Verifica se o erro do store é a violação de unicidade do nome."""
    for exc in (error, error.__cause__):
        if exc is None:
            continue
        message = str(exc).strip()
        if _CONSTRAINT_SIGNATURE in message or message == _SQLITE_SIGNATURE:
            return True
    return False


class CreateUserService(BaseService):
    """
    Use Case: Criar um novo usuário.

    Example:
        service = CreateUserService(user_repo, password_hasher, uow)
        result = service.execute(
            CreateUserInputDTO(name="alice", email="a@x.io", password="secret")
        )
        result.data  # ID do usuário criado
    """

    def __init__(
        self,
        user_repo: UserRepository,
        password_hasher: PasswordHasher,
        uow: UnitOfWork,
    ):
        self.user_repo = user_repo
        self.password_hasher = password_hasher
        self.uow = uow

    def _handle(self, input_dto: CreateUserInputDTO) -> Result[int]:
        if not input_dto.name:
            raise ValidationError("Name is required", field="name")
        if not input_dto.password:
            raise ValidationError("Password is required", field="password")

        if self.user_repo.get_user_by_username(input_dto.name) is not None:
            raise ConflictError(USER_EXISTS_MESSAGE)

        user = UserEntity.create(
            name=input_dto.name,
            email=input_dto.email,
            password_hash=self.password_hasher.hash(input_dto.password),
        )

        with self.uow:
            user_id = self.user_repo.create_user(user)
            self.uow.publish_event(
                UserCreatedEvent(
                    aggregate_id=str(user_id),
                    name=user.name,
                    email=user.email,
                )
            )

        logger.info(f"User created: {user_id}")
        return Result.success(user_id, USER_CREATED_MESSAGE, http_status=201)

    def _translate_error(self, error: Exception, input_dto: CreateUserInputDTO):
        if is_unique_name_violation(error):
            logger.warning(f"Duplicate username detected: {input_dto.name}")
            return Result.failure(ResponseCode.CONFLICT, USER_EXISTS_MESSAGE)
        return None
