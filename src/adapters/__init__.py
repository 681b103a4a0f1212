"""Adapters de infraestrutura (Django, Celery)."""
