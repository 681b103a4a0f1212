"""
Configuração do Django App de Tickets.

Um único app concentra users, tickets e assigned_tickets para
que as três tabelas fiquem na mesma migration.
"""

from django.apps import AppConfig


class TicketsConfig(AppConfig):
    """Configuração do app Tickets."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'src.adapters.django_app.tickets'
    label = 'tickets'
    verbose_name = 'Tickets e Atribuições'
