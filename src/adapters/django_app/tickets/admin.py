"""
Django Admin para Usuários, Tickets e Atribuições.

Somente leitura do histórico de atribuições: alterações de status
passam pela API para manter as regras de negócio.
"""

from django.contrib import admin
from django.utils.html import format_html

from .models import AssignedTicketModel, TicketModel, UserModel


@admin.register(UserModel)
class UserAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'email', 'created_at']
    search_fields = ['name', 'email']
    readonly_fields = ['id', 'password_hash', 'created_at', 'updated_at']
    ordering = ['id']


class AssignedTicketInline(admin.TabularInline):
    model = AssignedTicketModel
    extra = 0
    can_delete = False
    readonly_fields = ['assignee', 'assigner', 'status', 'created_at', 'updated_at']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(TicketModel)
class TicketAdmin(admin.ModelAdmin):
    """Admin para TicketModel."""

    list_display = ['id', 'name', 'creator', 'created_at', 'updated_at']
    list_filter = ['created_at']
    search_fields = ['name', 'description', 'creator__name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [AssignedTicketInline]
    ordering = ['-created_at']
    date_hierarchy = 'created_at'


@admin.register(AssignedTicketModel)
class AssignedTicketAdmin(admin.ModelAdmin):
    """Admin (somente leitura) para o histórico de atribuições."""

    list_display = ['id', 'ticket', 'assignee', 'assigner', 'status_badge', 'updated_at']
    list_filter = ['status']
    search_fields = ['ticket__name', 'assignee__name', 'assigner__name']
    ordering = ['-updated_at', '-id']

    def status_badge(self, obj):
        """Exibe status com badge colorido."""
        colors = {
            'Pending': '#17a2b8',
            'InProgress': '#ffc107',
            'Done': '#28a745',
            'Rejected': '#dc3545',
        }
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px;">{}</span>',
            colors.get(obj.status, '#6c757d'),
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
