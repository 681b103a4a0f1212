"""
API Views JSON para os domínios de Usuários e Tickets.

Endpoints (montados em /api/):
- POST   users/                          - Criar usuário
- POST   tickets/                        - Criar ticket
- DELETE tickets/                        - Excluir tickets em lote
- GET    tickets/<id>/                   - Obter ticket
- PUT    tickets/<id>/                   - Substituir conteúdo
- POST   tickets/<id>/assign/            - Atribuir ticket
- GET    tickets/created/                - Tickets que criei
- GET    tickets/assigned-to-me/         - Atribuições recebidas
- GET    tickets/assigned-by-me/         - Atribuições feitas
- GET    tickets/search/?q=              - Buscar por nome
- PATCH  assignments/<id>/status/        - Alterar status

Formato:
- Entrada: JSON
- Saída: envelope do Result {success, code, message, data}

Autenticação:
- ID do chamador no header X-User-Id (ausente/inválido → 401)
"""

import json
import logging
from typing import Any, Dict, List, Optional

from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from src.core.shared.exceptions import DomainException, ValidationError
from src.core.shared.result import ResponseCode, Result
from src.core.shared.services import INTERNAL_ERROR_MESSAGE
from src.core.tickets.dtos import (
    AssignTicketInputDTO,
    ChangeAssignmentStatusInputDTO,
    CreateTicketInputDTO,
    DeleteTicketsInputDTO,
    SearchTicketsQueryDTO,
    UpdateTicketInputDTO,
)
from src.core.users.dtos import CreateUserInputDTO
from src.config.container import get_container

logger = logging.getLogger(__name__)

USER_ID_HEADER = 'X-User-Id'
MAX_USER_ID = 2 ** 63 - 1  # limite do BigAutoField


class NotAuthenticatedError(Exception):
    """Header de identificação ausente ou inválido."""


# =============================================================================
# Helpers
# =============================================================================

def result_response(result: Result) -> JsonResponse:
    """Serializa o Result com o status HTTP correspondente."""
    return JsonResponse(result.to_dict(), status=result.http_status)


def parse_json_body(request: HttpRequest) -> Dict:
    """
    Parseia body JSON do request.

    Raises:
        ValidationError: Se JSON inválido ou não for um objeto
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"Invalid JSON: {e}")

    if not isinstance(data, dict):
        raise ValidationError("JSON body must be an object")
    return data


def get_user_id(request: HttpRequest) -> int:
    """
    Extrai o ID do chamador do header X-User-Id.

    Raises:
        NotAuthenticatedError: Se ausente, não numérico ou fora do intervalo de IDs
    """
    raw = request.headers.get(USER_ID_HEADER, '').strip()
    if not (raw.isascii() and raw.isdigit()) or int(raw) > MAX_USER_ID:
        raise NotAuthenticatedError(f"Missing or invalid {USER_ID_HEADER} header")
    return int(raw)


def int_field(data: Dict, key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{key} must be an integer", field=key)
    return value


def int_list_field(data: Dict, key: str) -> List[int]:
    values = data.get(key)
    if not isinstance(values, list) or any(
        isinstance(v, bool) or not isinstance(v, int) for v in values
    ):
        raise ValidationError(f"{key} must be a list of integers", field=key)
    return values


def optional_str(data: Dict, key: str) -> Optional[str]:
    value = data.get(key)
    return None if value is None else str(value)


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    View base para APIs JSON.

    Fornece:
    - Parsing de JSON
    - Acesso ao container DI
    - Tradução de erros da própria view para o envelope
      (erros de regra já chegam como Result dos services)
    """

    def get_container(self):
        return get_container()

    def get_service(self, service_name: str):
        return getattr(self.get_container(), service_name)()

    def parse_body(self, request: HttpRequest) -> Dict:
        return parse_json_body(request)

    def run(self, service_name: str, request_dto: Any = None) -> JsonResponse:
        result = self.get_service(service_name).execute(request_dto)
        return result_response(result)

    def handle_exception(self, e: Exception) -> JsonResponse:
        if isinstance(e, NotAuthenticatedError):
            return result_response(Result.failure(ResponseCode.UNAUTHORIZED, str(e)))

        if isinstance(e, DomainException):
            return result_response(Result.from_exception(e))

        logger.exception(f"Erro inesperado na API: {e}")
        return result_response(
            Result.failure(ResponseCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)
        )


# =============================================================================
# Users
# =============================================================================

class UserAPIView(BaseAPIView):
    """
    POST /api/users/

    Body JSON:
    {
        "name": "string (obrigatório)",
        "email": "string",
        "password": "string (obrigatório)"
    }
    """

    def post(self, request: HttpRequest) -> JsonResponse:
        try:
            data = self.parse_body(request)
            input_dto = CreateUserInputDTO(
                name=optional_str(data, 'name'),
                email=optional_str(data, 'email'),
                password=optional_str(data, 'password'),
            )
            return self.run('create_user_service', input_dto)
        except Exception as e:
            return self.handle_exception(e)


# =============================================================================
# Tickets
# =============================================================================

class TicketAPIListView(BaseAPIView):
    """
    POST   /api/tickets/ - Cria ticket
    DELETE /api/tickets/ - Exclui tickets em lote ({"ids": [...]})
    """

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Body JSON:
        {
            "name": "string (obrigatório)",
            "description": "string",
            "file_description": "string (opcional)"
        }
        """
        try:
            caller_id = get_user_id(request)
            data = self.parse_body(request)
            input_dto = CreateTicketInputDTO(
                name=optional_str(data, 'name'),
                description=optional_str(data, 'description') or '',
                creator_id=caller_id,
                file_description=optional_str(data, 'file_description'),
            )
            return self.run('create_ticket_service', input_dto)
        except Exception as e:
            return self.handle_exception(e)

    def delete(self, request: HttpRequest) -> JsonResponse:
        try:
            caller_id = get_user_id(request)
            data = self.parse_body(request)
            input_dto = DeleteTicketsInputDTO(
                ids=tuple(int_list_field(data, 'ids')),
                caller_id=caller_id,
            )
            return self.run('delete_tickets_service', input_dto)
        except Exception as e:
            return self.handle_exception(e)


class TicketAPIDetailView(BaseAPIView):
    """
    GET /api/tickets/<id>/ - Obter ticket
    PUT /api/tickets/<id>/ - Substituir nome, descrição e anexo
    """

    def get(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            get_user_id(request)
            return self.run('get_ticket_by_id_service', pk)
        except Exception as e:
            return self.handle_exception(e)

    def put(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            caller_id = get_user_id(request)
            data = self.parse_body(request)
            input_dto = UpdateTicketInputDTO(
                ticket_id=pk,
                caller_id=caller_id,
                name=optional_str(data, 'name'),
                description=optional_str(data, 'description') or '',
                file_description=optional_str(data, 'file_description'),
            )
            return self.run('update_ticket_service', input_dto)
        except Exception as e:
            return self.handle_exception(e)


class TicketAPIAssignView(BaseAPIView):
    """
    POST /api/tickets/<id>/assign/

    Body JSON:
    {
        "assignee_id": int (obrigatório)
    }
    """

    def post(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            caller_id = get_user_id(request)
            data = self.parse_body(request)
            input_dto = AssignTicketInputDTO(
                ticket_id=pk,
                assignee_id=int_field(data, 'assignee_id'),
                assigner_id=caller_id,
            )
            return self.run('assign_ticket_service', input_dto)
        except Exception as e:
            return self.handle_exception(e)


class TicketsCreatedAPIView(BaseAPIView):
    """GET /api/tickets/created/"""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            return self.run('get_tickets_by_creator_service', get_user_id(request))
        except Exception as e:
            return self.handle_exception(e)


class TicketsAssignedToMeAPIView(BaseAPIView):
    """GET /api/tickets/assigned-to-me/"""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            return self.run('get_tickets_assigned_to_me_service', get_user_id(request))
        except Exception as e:
            return self.handle_exception(e)


class TicketsAssignedByMeAPIView(BaseAPIView):
    """GET /api/tickets/assigned-by-me/"""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            return self.run('get_tickets_assigned_by_me_service', get_user_id(request))
        except Exception as e:
            return self.handle_exception(e)


class TicketSearchAPIView(BaseAPIView):
    """GET /api/tickets/search/?q=<trecho do nome>"""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            query = SearchTicketsQueryDTO(
                user_id=get_user_id(request),
                name_pattern=request.GET.get('q', ''),
            )
            return self.run('search_tickets_service', query)
        except Exception as e:
            return self.handle_exception(e)


# =============================================================================
# Assignments
# =============================================================================

class AssignmentStatusAPIView(BaseAPIView):
    """
    PATCH /api/assignments/<id>/status/

    Body JSON:
    {
        "status": "Pending|InProgress|Done|Rejected"
    }
    """

    def patch(self, request: HttpRequest, pk: int) -> JsonResponse:
        try:
            caller_id = get_user_id(request)
            data = self.parse_body(request)
            input_dto = ChangeAssignmentStatusInputDTO(
                assignment_id=pk,
                status=optional_str(data, 'status') or '',
                caller_id=caller_id,
            )
            return self.run('change_assignment_status_service', input_dto)
        except Exception as e:
            return self.handle_exception(e)
