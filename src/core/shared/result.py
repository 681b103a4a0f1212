"""
Result - Envelope uniforme de resposta dos Use Cases.

Todo service devolve um Result: sucesso com dados e mensagem, ou
falha com código de resposta e status HTTP correspondente. As views
apenas serializam o envelope, sem conhecer as regras de mapeamento.

Formato serializado:
    {
        "success": true,
        "code": "Success",
        "message": "User Created Successfully",
        "data": 7
    }
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from .exceptions import (
    DomainException,
    ValidationError,
    EntityNotFoundError,
    ConflictError,
    ForbiddenError,
    BusinessRuleViolationError,
)


T = TypeVar("T")


class ResponseCode(Enum):
    """Códigos de resposta expostos na API."""

    SUCCESS = "Success"
    VALIDATION_ERROR = "ValidationError"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    UNPROCESSABLE = "Unprocessable"
    INTERNAL_ERROR = "InternalError"

    @property
    def http_status(self) -> int:
        """Status HTTP padrão para o código."""
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ResponseCode.SUCCESS: 200,
    ResponseCode.VALIDATION_ERROR: 400,
    ResponseCode.NOT_FOUND: 404,
    ResponseCode.CONFLICT: 409,
    ResponseCode.UNAUTHORIZED: 401,
    ResponseCode.FORBIDDEN: 403,
    ResponseCode.UNPROCESSABLE: 422,
    ResponseCode.INTERNAL_ERROR: 500,
}

# Ordem importa: subclasses antes da base
_EXCEPTION_CODES = (
    (ValidationError, ResponseCode.VALIDATION_ERROR),
    (EntityNotFoundError, ResponseCode.NOT_FOUND),
    (ConflictError, ResponseCode.CONFLICT),
    (ForbiddenError, ResponseCode.FORBIDDEN),
    (BusinessRuleViolationError, ResponseCode.UNPROCESSABLE),
)


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Resultado tipado de uma operação.

    Attributes:
        is_success: Se a operação foi bem sucedida
        code: Código de resposta
        message: Mensagem para o cliente
        data: Dados retornados (apenas em sucesso)
        http_status: Status HTTP a ser usado pela view

    Example:
        result = Result.success(user_id, "User Created Successfully", 201)
        if result.is_success:
            print(result.data)
    """

    is_success: bool
    code: ResponseCode
    message: str = ""
    data: Optional[T] = None
    http_status: int = 200

    @classmethod
    def success(
        cls,
        data: Optional[T] = None,
        message: str = "",
        http_status: int = 200,
    ) -> "Result[T]":
        """Cria resultado de sucesso."""
        return cls(
            is_success=True,
            code=ResponseCode.SUCCESS,
            message=message,
            data=data,
            http_status=http_status,
        )

    @classmethod
    def failure(
        cls,
        code: ResponseCode,
        message: str,
        http_status: Optional[int] = None,
    ) -> "Result[T]":
        """
        Cria resultado de falha.

        Args:
            code: Código de resposta
            message: Mensagem segura para o cliente
            http_status: Sobrescreve o status padrão do código
        """
        return cls(
            is_success=False,
            code=code,
            message=message,
            http_status=http_status or code.http_status,
        )

    @classmethod
    def from_exception(cls, exc: DomainException) -> "Result[T]":
        """Converte exceção de domínio em falha."""
        for exc_type, code in _EXCEPTION_CODES:
            if isinstance(exc, exc_type):
                return cls.failure(code, exc.message)
        return cls.failure(ResponseCode.VALIDATION_ERROR, exc.message)

    def to_dict(self) -> Dict[str, Any]:
        """Converte para dicionário (serialização JSON)."""
        return {
            "success": self.is_success,
            "code": self.code.value,
            "message": self.message,
            "data": self.data,
        }
