"""
Migration inicial.

Cria as tabelas:
- users: Usuários (constraint uq_users_name)
- tickets: Tickets
- assigned_tickets: Histórico de atribuições
"""

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    """Migration inicial."""

    initial = True

    dependencies = [
    ]

    operations = [
        # =================================================================
        # Tabela: users
        # =================================================================
        migrations.CreateModel(
            name='UserModel',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('name', models.CharField(
                    max_length=100,
                    help_text='Nome de usuário (único)'
                )),
                ('email', models.CharField(blank=True, default='', max_length=255)),
                ('password_hash', models.CharField(
                    max_length=255,
                    help_text='Hash da senha (nunca a senha em texto)'
                )),
                ('avatar_url', models.CharField(blank=True, default='', max_length=100)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'verbose_name': 'Usuário',
                'verbose_name_plural': 'Usuários',
                'db_table': 'users',
            },
        ),
        migrations.AddConstraint(
            model_name='usermodel',
            constraint=models.UniqueConstraint(fields=('name',), name='uq_users_name'),
        ),

        # =================================================================
        # Tabela: tickets
        # =================================================================
        migrations.CreateModel(
            name='TicketModel',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('name', models.CharField(
                    max_length=200,
                    db_index=True,
                    help_text='Nome do ticket'
                )),
                ('description', models.TextField(blank=True, default='')),
                ('file_description', models.CharField(
                    max_length=255,
                    null=True,
                    blank=True,
                    help_text='Descrição do anexo'
                )),
                ('created_at', models.DateTimeField(
                    default=django.utils.timezone.now,
                    db_index=True
                )),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('creator', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='created_tickets',
                    to='tickets.usermodel'
                )),
            ],
            options={
                'verbose_name': 'Ticket',
                'verbose_name_plural': 'Tickets',
                'db_table': 'tickets',
                'ordering': ['id'],
            },
        ),
        migrations.AddIndex(
            model_name='ticketmodel',
            index=models.Index(
                fields=['creator', 'created_at'],
                name='tickets_creator_created_idx'
            ),
        ),

        # =================================================================
        # Tabela: assigned_tickets
        # =================================================================
        migrations.CreateModel(
            name='AssignedTicketModel',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('status', models.CharField(
                    max_length=20,
                    choices=[
                        ('Pending', 'Pending'),
                        ('InProgress', 'In Progress'),
                        ('Done', 'Done'),
                        ('Rejected', 'Rejected'),
                    ],
                    default='Pending',
                    db_index=True
                )),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('ticket', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='assignments',
                    to='tickets.ticketmodel'
                )),
                ('assignee', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='received_assignments',
                    to='tickets.usermodel'
                )),
                ('assigner', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='sent_assignments',
                    to='tickets.usermodel'
                )),
            ],
            options={
                'verbose_name': 'Atribuição',
                'verbose_name_plural': 'Atribuições',
                'db_table': 'assigned_tickets',
                'ordering': ['id'],
            },
        ),
        migrations.AddIndex(
            model_name='assignedticketmodel',
            index=models.Index(
                fields=['ticket', 'updated_at'],
                name='assigned_ticket_updated_idx'
            ),
        ),
        migrations.AddIndex(
            model_name='assignedticketmodel',
            index=models.Index(
                fields=['assignee', 'updated_at'],
                name='assigned_assignee_updated_idx'
            ),
        ),
        migrations.AddIndex(
            model_name='assignedticketmodel',
            index=models.Index(
                fields=['assigner', 'updated_at'],
                name='assigned_assigner_updated_idx'
            ),
        ),
    ]
