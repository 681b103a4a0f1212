"""
Base para Application Services.

Cada Use Case implementa `_handle()` lançando exceções de domínio;
`execute()` é a fronteira de tradução: converte exceções de domínio
em Result.failure() e qualquer outro erro em InternalError, logando
a causa completa apenas no servidor.
"""

from abc import ABC, abstractmethod
from typing import Any
import logging

from .exceptions import DomainException
from .result import Result, ResponseCode

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class BaseService(ABC):
    """
    Service base com tratamento uniforme de erros.

    Subclasses podem sobrescrever `_translate_error()` para reconhecer
    erros específicos do store (ex: violação de unicidade).
    """

    def execute(self, request: Any = None) -> Result:
        try:
            return self._handle(request)
        except DomainException as e:
            logger.info(f"{self.__class__.__name__} rejected request: {e}")
            return Result.from_exception(e)
        except Exception as e:
            translated = self._translate_error(e, request)
            if translated is not None:
                return translated
            logger.exception(f"Unexpected error in {self.__class__.__name__}")
            return Result.failure(ResponseCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

    @abstractmethod
    def _handle(self, request: Any) -> Result:
        raise NotImplementedError

    def _translate_error(self, error: Exception, request: Any):
        """Hook para mapear erros de infraestrutura conhecidos."""
        return None
