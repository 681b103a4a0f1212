#!/usr/bin/env python
"""
Setup rápido para desenvolvimento local.

Este script:
1. Configura Django settings
2. Cria banco de dados SQLite
3. Executa migrations
4. Cria dados de exemplo (opcional) usando os próprios use cases

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --with-sample-data
"""

import os
import sys
import argparse

# Raiz do projeto no path (pacote `src`)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def setup_django():
    """Configura Django para uso standalone."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

    # Forçar SQLite para desenvolvimento rápido
    os.environ['DATABASE_URL'] = 'sqlite:///db.sqlite3'

    import django
    django.setup()


def run_migrations():
    from django.core.management import call_command

    print("📦 Executando migrations...")
    call_command('migrate', verbosity=1)
    print("✅ Migrations concluídas!")


def _require(result, what: str):
    if not result.is_success:
        raise SystemExit(f"❌ Falha ao criar {what}: {result.code.value} - {result.message}")
    return result.data


def create_sample_data():
    """Cria usuários, tickets e atribuições de exemplo."""
    from src.config.container import get_container
    from src.core.tickets.dtos import AssignTicketInputDTO, CreateTicketInputDTO
    from src.core.users.dtos import CreateUserInputDTO

    container = get_container()

    print("👤 Criando usuários de exemplo...")
    user_ids = {}
    for name in ('alice', 'bob', 'carol'):
        existing = container.user_repository().get_user_by_username(name)
        if existing:
            user_ids[name] = existing.id
            print(f"   • {name} já existe (id={existing.id})")
            continue
        result = container.create_user_service().execute(
            CreateUserInputDTO(name=name, email=f"{name}@example.com", password='changeme')
        )
        user_ids[name] = _require(result, f"usuário {name}")
        print(f"   ✓ {name} (id={user_ids[name]})")

    sample_tickets = [
        ('alice', 'Sistema fora do ar', 'Erro 503 em todas as páginas.', 'bob'),
        ('alice', 'Bug no login', 'O botão de login não responde ao clicar.', 'carol'),
        ('bob', 'Relatório com valores incorretos', 'Valores negativos em algumas colunas.', 'alice'),
        ('carol', 'Modo escuro', 'Sugestão de melhoria no layout.', None),
    ]

    print("📝 Criando tickets de exemplo...")
    for creator, name, description, assignee in sample_tickets:
        ticket_id = _require(
            container.create_ticket_service().execute(
                CreateTicketInputDTO(
                    name=name,
                    description=description,
                    creator_id=user_ids[creator],
                )
            ),
            f"ticket {name}",
        )
        print(f"   ✓ [{ticket_id}] {name}")

        if assignee:
            _require(
                container.assign_ticket_service().execute(
                    AssignTicketInputDTO(
                        ticket_id=ticket_id,
                        assignee_id=user_ids[assignee],
                        assigner_id=user_ids[creator],
                    )
                ),
                f"atribuição de {name}",
            )
            print(f"     → atribuído a {assignee}")

    print(f"✅ {len(sample_tickets)} tickets criados!")


def check_connection():
    """Verifica conexão com o banco."""
    from django.db import connection

    print("🔍 Verificando conexão com o banco...")

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        print("✅ Conexão OK!")
        return True
    except Exception as e:
        print(f"❌ Erro de conexão: {e}")
        return False


def show_info():
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Database Engine: {settings.DATABASES['default']['ENGINE']}")
    print(f"  Database Name: {settings.DATABASES['default']['NAME']}")
    print(f"  Event Publisher: {settings.EVENT_PUBLISHER_MODE}")
    print("=" * 60)
    print("\n🚀 Próximos passos:")
    print("   1. python manage.py runserver")
    print("   2. curl -H 'X-User-Id: 1' http://localhost:8000/api/tickets/created/")
    print("\n")


def main():
    parser = argparse.ArgumentParser(description='Setup rápido para desenvolvimento')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Criar dados de exemplo'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar conexão'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("🔧 TicketFlow - Quick Setup")
    print("=" * 60 + "\n")

    setup_django()

    if args.check_only:
        check_connection()
        return

    if not check_connection():
        print("\n⚠️  Certifique-se de que o banco de dados está rodando.")
        return

    run_migrations()

    if args.with_sample_data:
        create_sample_data()

    show_info()


if __name__ == '__main__':
    main()
