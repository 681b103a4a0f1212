"""
Django Models para os domínios de Usuários e Tickets.

Estes models são ADAPTERS - implementam a persistência para as
entidades de domínio definidas em src/core/*/entities.py.

IMPORTANTE:
- Models NÃO contêm lógica de negócio
- Lógica de negócio fica nas Entities do Core
- Models são mapeados para/de Entities via Mappers

Tabelas:
- users: Usuários (nome único via constraint uq_users_name)
- tickets: Tickets criados por usuários
- assigned_tickets: Histórico append-only de atribuições
"""

from django.db import models
from django.utils import timezone

from src.core.users.entities import USERNAME_UNIQUE_CONSTRAINT


class AssignmentStatusChoices(models.TextChoices):
    """Choices para status de atribuição (espelha AssignmentStatus do Core)."""
    PENDING = 'Pending', 'Pending'
    IN_PROGRESS = 'InProgress', 'In Progress'
    DONE = 'Done', 'Done'
    REJECTED = 'Rejected', 'Rejected'


class UserModel(models.Model):
    """
    Model Django para persistência de Usuários.

    A unicidade do nome é garantida pela constraint do banco; o
    service traduz a violação para Conflict.
    """

    id = models.BigAutoField(primary_key=True)

    name = models.CharField(
        max_length=100,
        help_text="Nome de usuário (único)"
    )

    email = models.CharField(
        max_length=255,
        blank=True,
        default='',
    )

    password_hash = models.CharField(
        max_length=255,
        help_text="Hash da senha (nunca a senha em texto)"
    )

    avatar_url = models.CharField(
        max_length=100,
        blank=True,
        default='',
    )

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'users'
        verbose_name = 'Usuário'
        verbose_name_plural = 'Usuários'
        constraints = [
            models.UniqueConstraint(
                fields=['name'],
                name=USERNAME_UNIQUE_CONSTRAINT,
            ),
        ]

    def __str__(self):
        return self.name


class TicketModel(models.Model):
    """
    Model Django para persistência de Tickets.

    Fields:
        id: Autoincremento atribuído pelo banco
        name: Nome do ticket
        description: Descrição detalhada
        file_description: Descrição do anexo (opcional)
        creator: Usuário criador
        created_at / updated_at: Timestamps controlados pela Entity
    """

    id = models.BigAutoField(primary_key=True)

    name = models.CharField(
        max_length=200,
        db_index=True,
        help_text="Nome do ticket"
    )

    description = models.TextField(blank=True, default='')

    file_description = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Descrição do anexo"
    )

    creator = models.ForeignKey(
        UserModel,
        on_delete=models.CASCADE,
        related_name='created_tickets',
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'tickets'
        verbose_name = 'Ticket'
        verbose_name_plural = 'Tickets'
        ordering = ['id']
        indexes = [
            models.Index(fields=['creator', 'created_at'], name='tickets_creator_created_idx'),
        ]

    def __str__(self):
        return f"[{self.id}] {self.name}"

    def __repr__(self):
        return f"<TicketModel id={self.id} creator={self.creator_id}>"


class AssignedTicketModel(models.Model):
    """
    Registro de atribuição (append-only).

    Excluir um ticket remove seus registros em cascata.
    """

    id = models.BigAutoField(primary_key=True)

    ticket = models.ForeignKey(
        TicketModel,
        on_delete=models.CASCADE,
        related_name='assignments',
    )

    assignee = models.ForeignKey(
        UserModel,
        on_delete=models.CASCADE,
        related_name='received_assignments',
    )

    assigner = models.ForeignKey(
        UserModel,
        on_delete=models.CASCADE,
        related_name='sent_assignments',
    )

    status = models.CharField(
        max_length=20,
        choices=AssignmentStatusChoices.choices,
        default=AssignmentStatusChoices.PENDING,
        db_index=True,
    )

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'assigned_tickets'
        verbose_name = 'Atribuição'
        verbose_name_plural = 'Atribuições'
        ordering = ['id']
        indexes = [
            models.Index(fields=['ticket', 'updated_at'], name='assigned_ticket_updated_idx'),
            models.Index(fields=['assignee', 'updated_at'], name='assigned_assignee_updated_idx'),
            models.Index(fields=['assigner', 'updated_at'], name='assigned_assigner_updated_idx'),
        ]

    def __str__(self):
        return f"Ticket {self.ticket_id} → {self.assignee_id} ({self.status})"
