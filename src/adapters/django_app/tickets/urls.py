"""
URL patterns da API JSON (montadas em /api/).

Rotas fixas (created/, search/, ...) não conflitam com <int:pk>.
"""

from django.urls import path

from . import api_views

app_name = 'tickets'

urlpatterns = [
    # Usuários
    path('users/', api_views.UserAPIView.as_view(), name='users'),

    # Tickets
    path('tickets/', api_views.TicketAPIListView.as_view(), name='tickets'),
    path('tickets/created/', api_views.TicketsCreatedAPIView.as_view(), name='tickets_created'),
    path(
        'tickets/assigned-to-me/',
        api_views.TicketsAssignedToMeAPIView.as_view(),
        name='tickets_assigned_to_me',
    ),
    path(
        'tickets/assigned-by-me/',
        api_views.TicketsAssignedByMeAPIView.as_view(),
        name='tickets_assigned_by_me',
    ),
    path('tickets/search/', api_views.TicketSearchAPIView.as_view(), name='tickets_search'),
    path('tickets/<int:pk>/', api_views.TicketAPIDetailView.as_view(), name='ticket_detail'),
    path('tickets/<int:pk>/assign/', api_views.TicketAPIAssignView.as_view(), name='ticket_assign'),

    # Atribuições
    path(
        'assignments/<int:pk>/status/',
        api_views.AssignmentStatusAPIView.as_view(),
        name='assignment_status',
    ),
]
