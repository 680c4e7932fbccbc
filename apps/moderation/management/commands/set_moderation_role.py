"""
Management command to set a user's moderation role out-of-band.

This is the only way to grant ADMIN; the API can only move users between
USER and MODERATOR.

Usage:
    python manage.py set_moderation_role alice@example.com ADMIN
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.accounts.models import User
from apps.moderation.models import ModerationRole
from apps.moderation.services.registry import ModerationRegistry


class Command(BaseCommand):
    help = 'Set the moderation role (USER, MODERATOR, ADMIN) of a user'

    def add_arguments(self, parser):
        parser.add_argument('email', help='Email of the user')
        parser.add_argument(
            'role',
            choices=ModerationRole.values,
            type=str.upper,
            help='New moderation role',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        try:
            user = User.objects.get(email__iexact=options['email'])
        except User.DoesNotExist:
            raise CommandError(f"No user with email {options['email']}")

        registry = ModerationRegistry()
        record = registry.get_or_create_record(user.id)
        record.role = options['role']
        registry.save_record(record, ['role'])

        self.stdout.write(self.style.SUCCESS(f'{user.email} is now {record.role}'))
