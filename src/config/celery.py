"""
Configuração do Celery para processamento assíncrono.

O Celery é usado para:
- Processar Domain Events publicados após commit
- Notificações (responsável, atribuidor)

Uso:
    celery -A src.config.celery worker -l INFO -Q default,events,notifications
"""

import os

from celery import Celery
from kombu import Exchange, Queue

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

app = Celery('ticketflow')

# Configurações CELERY_* do Django
app.config_from_object('django.conf:settings', namespace='CELERY')

# Filas
app.conf.task_default_queue = 'default'
app.conf.task_queues = (
    Queue('default', Exchange('default'), routing_key='default'),
    Queue('events', Exchange('events'), routing_key='events.#'),
    Queue('notifications', Exchange('notifications'), routing_key='notifications.#'),
)

# Roteamento de tarefas para filas
app.conf.task_routes = {
    'src.adapters.django_app.events.handlers.notify_user': {'queue': 'notifications'},
    'src.adapters.django_app.events.handlers.record_metric': {'queue': 'notifications'},
    'src.adapters.django_app.events.handlers.*': {'queue': 'events'},
}

app.autodiscover_tasks(['src.adapters.django_app.events'], related_name='handlers')
