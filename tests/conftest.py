"""
Configurações globais do Pytest para o TicketFlow.

Este arquivo é carregado automaticamente pelo pytest e:
- Configura o Django (SQLite em memória) antes da coleta
- Fornece fixtures compartilhadas entre core e adapters
"""

from pathlib import Path

import pytest


def pytest_configure(config):
    """Configura Django antes dos testes (pytest-django chama django.setup)."""
    from django.conf import settings

    config.addinivalue_line(
        "markers", "integration: testes que exercitam várias camadas juntas"
    )

    if settings.configured:
        return

    settings.configure(
        DEBUG=True,
        SECRET_KEY='test-secret-key',
        DATABASES={
            'default': {
                'ENGINE': 'django.db.backends.sqlite3',
                'NAME': ':memory:',
            }
        },
        INSTALLED_APPS=[
            'django.contrib.admin',
            'django.contrib.contenttypes',
            'django.contrib.auth',
            'django.contrib.sessions',
            'django.contrib.messages',
            'src.adapters.django_app.tickets',
        ],
        MIDDLEWARE=[
            'django.middleware.common.CommonMiddleware',
            'django.contrib.sessions.middleware.SessionMiddleware',
            'django.middleware.csrf.CsrfViewMiddleware',
            'django.contrib.auth.middleware.AuthenticationMiddleware',
            'django.contrib.messages.middleware.MessageMiddleware',
        ],
        ROOT_URLCONF='src.config.urls',
        TEMPLATES=[{
            'BACKEND': 'django.template.backends.django.DjangoTemplates',
            'DIRS': [],
            'APP_DIRS': True,
            'OPTIONS': {
                'context_processors': [
                    'django.template.context_processors.request',
                    'django.contrib.auth.context_processors.auth',
                    'django.contrib.messages.context_processors.messages',
                ],
            },
        }],
        # MD5 apenas para acelerar os testes; bcrypt é testado à parte
        PASSWORD_HASHERS=[
            'django.contrib.auth.hashers.MD5PasswordHasher',
            'django.contrib.auth.hashers.BCryptSHA256PasswordHasher',
        ],
        DEFAULT_AUTO_FIELD='django.db.models.BigAutoField',
        USE_TZ=True,
        TIME_ZONE='America/Sao_Paulo',
        EVENT_PUBLISHER_MODE='sync',
        CELERY_TASK_ALWAYS_EAGER=True,
        CELERY_BROKER_URL='memory://',
        CELERY_RESULT_BACKEND='cache+memory://',
    )


@pytest.fixture(scope="session")
def project_root():
    """Retorna o caminho raiz do projeto."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def reset_global_container():
    """
    Reset do container global entre testes.

    Garante que cada teste inicia com publisher e repositórios novos.
    """
    from src.config.container import reset_container

    reset_container()
    yield
    reset_container()
