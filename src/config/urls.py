"""
URL Configuration.

Estrutura:
- /admin/  - Django Admin
- /api/    - API JSON (usuários, tickets, atribuições)
- /health/ - Health check
"""

from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path


def health(request):
    return JsonResponse({'status': 'ok'})


urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('src.adapters.django_app.tickets.urls')),
    path('health/', health, name='health'),
]
