"""
Fixtures para testes com Django (banco SQLite em memória).

O Django é configurado em tests/conftest.py; o pytest-django cria
o banco de testes aplicando as migrations.
"""

import pytest


@pytest.fixture
def user_model_factory(db):
    """Factory para criar UserModel para testes."""
    from src.adapters.django_app.tickets.models import UserModel

    def create_user(name, **kwargs):
        defaults = {
            'name': name,
            'email': f'{name}@example.com',
            'password_hash': 'x',
        }
        defaults.update(kwargs)
        return UserModel.objects.create(**defaults)

    return create_user


@pytest.fixture
def ticket_model_factory(db):
    """Factory para criar TicketModel para testes."""
    from src.adapters.django_app.tickets.models import TicketModel

    def create_ticket(creator, **kwargs):
        defaults = {
            'name': 'Ticket de Teste',
            'description': 'Descrição do ticket de teste',
            'creator': creator,
        }
        defaults.update(kwargs)
        return TicketModel.objects.create(**defaults)

    return create_ticket


@pytest.fixture
def assignment_model_factory(db):
    """Factory para criar AssignedTicketModel (permite fixar timestamps)."""
    from src.adapters.django_app.tickets.models import AssignedTicketModel

    def create_assignment(ticket, assignee, assigner, **kwargs):
        return AssignedTicketModel.objects.create(
            ticket=ticket,
            assignee=assignee,
            assigner=assigner,
            **kwargs,
        )

    return create_assignment


@pytest.fixture
def alice(user_model_factory):
    return user_model_factory('alice')


@pytest.fixture
def bob(user_model_factory):
    return user_model_factory('bob')


@pytest.fixture
def carol(user_model_factory):
    return user_model_factory('carol')
