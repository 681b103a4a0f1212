"""
Event Handlers - Processadores de Eventos de Domínio.

Handlers são executados de forma assíncrona via Celery quando
Domain Events são publicados (EVENT_PUBLISHER_MODE=celery).

Tipos de Handlers:
- Notificação: avisar responsável, atribuidor e criador
- Métricas: contadores por tipo de evento

Formato de entrada (DomainEvent.to_dict()):
    {
        "event_id": "...",
        "event_type": "TicketAssignedEvent",
        "aggregate_id": "42",
        "aggregate_type": "Ticket",
        "occurred_at": "2024-01-01T00:00:00+00:00",
        "version": 1,
        "data": {...}
    }
"""

import logging
from typing import Any, Dict

from celery import shared_task

logger = logging.getLogger(__name__)


def _payload(event_data: Dict[str, Any]) -> Dict[str, Any]:
    return event_data.get('data') or {}


# =============================================================================
# Event Handlers - Usuários
# =============================================================================

@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    acks_late=True,
)
def handle_user_created(self, event_data: Dict[str, Any]) -> None:
    """Handler para UserCreatedEvent: boas-vindas ao novo usuário."""
    user_id = event_data.get('aggregate_id')
    name = _payload(event_data).get('name')

    logger.info(f"[HANDLER] UserCreated: {user_id} | Nome: {name}")

    notify_user.delay(
        user_id=user_id,
        message=f"Welcome, {name}!",
        channel='email',
    )
    record_metric.delay(metric_name='users_created', value=1)


# =============================================================================
# Event Handlers - Tickets
# =============================================================================

@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    acks_late=True,
)
def handle_ticket_created(self, event_data: Dict[str, Any]) -> None:
    """Handler para TicketCreatedEvent: registra métrica."""
    ticket_id = event_data.get('aggregate_id')
    data = _payload(event_data)

    logger.info(
        f"[HANDLER] TicketCreated: {ticket_id} | "
        f"Criador: {data.get('creator_id')} | Nome: {data.get('name')}"
    )
    record_metric.delay(metric_name='tickets_created', value=1)


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    acks_late=True,
)
def handle_ticket_assigned(self, event_data: Dict[str, Any]) -> None:
    """
    Handler para TicketAssignedEvent.

    Ações:
    - Notificar o novo responsável
    - Notificar o responsável anterior (reatribuição)
    """
    ticket_id = event_data.get('aggregate_id')
    data = _payload(event_data)
    assignee_id = data.get('assignee_id')
    previous_assignee_id = data.get('previous_assignee_id')

    logger.info(
        f"[HANDLER] TicketAssigned: {ticket_id} | "
        f"Responsável: {assignee_id} | Por: {data.get('assigner_id')}"
    )

    notify_user.delay(
        user_id=assignee_id,
        message=f"Ticket {ticket_id} was assigned to you",
    )
    if previous_assignee_id is not None:
        notify_user.delay(
            user_id=previous_assignee_id,
            message=f"Ticket {ticket_id} was reassigned",
        )
    record_metric.delay(metric_name='tickets_assigned', value=1)


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    acks_late=True,
)
def handle_assignment_status_changed(self, event_data: Dict[str, Any]) -> None:
    """Handler para AssignmentStatusChangedEvent: avisa quem atribuiu."""
    ticket_id = event_data.get('aggregate_id')
    data = _payload(event_data)

    logger.info(
        f"[HANDLER] AssignmentStatusChanged: {ticket_id} | "
        f"{data.get('previous_status')} -> {data.get('new_status')}"
    )

    notify_user.delay(
        user_id=data.get('assigner_id'),
        message=f"Ticket {ticket_id} is now {data.get('new_status')}",
    )
    record_metric.delay(
        metric_name='assignment_status_changed',
        value=1,
        tags={'status': data.get('new_status')},
    )


@shared_task(bind=True, ignore_result=True)
def handle_ticket_changed(self, event_data: Dict[str, Any]) -> None:
    """Handler para TicketUpdatedEvent e TicketsDeletedEvent (auditoria)."""
    logger.info(
        f"[HANDLER] {event_data.get('event_type')}: "
        f"aggregate={event_data.get('aggregate_id')} | "
        f"data={_payload(event_data)}"
    )


# =============================================================================
# Event Dispatcher (Router)
# =============================================================================

EVENT_HANDLERS = {
    'UserCreatedEvent': handle_user_created,
    'TicketCreatedEvent': handle_ticket_created,
    'TicketUpdatedEvent': handle_ticket_changed,
    'TicketsDeletedEvent': handle_ticket_changed,
    'TicketAssignedEvent': handle_ticket_assigned,
    'AssignmentStatusChangedEvent': handle_assignment_status_changed,
}


@shared_task(bind=True, max_retries=5, default_retry_delay=30)
def dispatch_domain_event(self, event_type: str, event_data: Dict[str, Any]) -> None:
    """
    Dispatcher central para Domain Events.

    Roteia eventos para os handlers apropriados.

    Args:
        event_type: Tipo do evento (ex: 'TicketAssignedEvent')
        event_data: Evento serializado
    """
    handler = EVENT_HANDLERS.get(event_type)

    if handler:
        logger.info(f"[DISPATCHER] Roteando {event_type} para handler")
        handler.delay(event_data)
    else:
        logger.warning(f"[DISPATCHER] Handler não encontrado para {event_type}")


# =============================================================================
# Notification / Metric Tasks
# =============================================================================

@shared_task(bind=True, max_retries=3, default_retry_delay=120)
def notify_user(
    self,
    user_id,
    message: str,
    channel: str = 'email',
) -> None:
    """
    Notifica usuário pelo canal especificado.

    Args:
        user_id: ID do usuário
        message: Mensagem a enviar
        channel: Canal (email, push)
    """
    logger.info(f"[NOTIFICATION] {channel.upper()} para {user_id}: {message}")


@shared_task(bind=True, ignore_result=True)
def record_metric(
    self,
    metric_name: str,
    value: float,
    tags: Dict[str, str] = None
) -> None:
    """Registra métrica para monitoramento."""
    logger.info(f"[METRIC] {metric_name}={value} | tags={tags or {}}")
