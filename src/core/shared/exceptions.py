"""
Exceções de Domínio do TicketFlow.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas.

Hierarquia:
    DomainException (base)
    ├── ValidationError (validação de entrada)
    ├── EntityNotFoundError (entidade não existe)
    ├── ConflictError (entidade duplicada)
    ├── ForbiddenError (chamador sem permissão)
    └── BusinessRuleViolationError (regra de negócio violada)

Os services convertem estas exceções em Result.failure(); elas nunca
chegam às views.
"""


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            ticket.rename("")
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário (útil para APIs)."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Lançada quando um campo obrigatório está ausente ou vazio
    (após trim), ou quando um valor não pertence ao domínio.

    Example:
        if not name.strip():
            raise ValidationError("Name is required", field="name")
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class EntityNotFoundError(DomainException):
    """
    Entidade não encontrada no repositório.

    Example:
        ticket = repo.get_ticket_by_id(ticket_id)
        if not ticket:
            raise EntityNotFoundError(f"Ticket {ticket_id} not found")
    """

    def __init__(self, message: str, entity_type: str = None, entity_id=None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id is not None:
            result["entity_id"] = self.entity_id
        return result


class ConflictError(DomainException):
    """
    Entidade já existe (ex: nome de usuário duplicado).

    Lançada tanto pela verificação antecipada quanto pela
    tradução da violação de unicidade vinda do banco.
    """

    def __init__(self, message: str):
        super().__init__(message, "CONFLICT")


class ForbiddenError(DomainException):
    """
    Chamador não está autorizado a executar a operação.

    Example:
        if not repo.check_if_user_is_creator_of_tickets(caller_id, ids):
            raise ForbiddenError("Only the creator can delete these tickets")
    """

    def __init__(self, message: str):
        super().__init__(message, "FORBIDDEN")


class BusinessRuleViolationError(DomainException):
    """
    Violação de regra de negócio.

    Lançada quando uma operação viola uma regra de negócio
    estabelecida no domínio.

    Example:
        if current.assignee_id == assignee_id:
            raise BusinessRuleViolationError(
                "Ticket is already assigned to this user",
                rule="already_assigned",
            )
    """

    def __init__(self, message: str, rule: str = None):
        self.rule = rule
        super().__init__(message, "BUSINESS_RULE_VIOLATION")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.rule:
            result["rule"] = self.rule
        return result
