"""
Management command to create sample data for testing the API.

Usage:
    python manage.py create_sample_data

This creates:
- 4 users (admin, alice, bob, charlie)
- 1 group owned by alice with bob as ADMIN and charlie invited
- Private and group notes, a pending share and a vote
- A friendship between alice and bob
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User
from apps.friends.models import Friendship
from apps.friends.services import invite as invite_friend, accept as accept_friend
from apps.groups.models import Group, GroupMembership, GroupInvitation
from apps.groups.services import create_group, invite_user_by_email, respond_to_invitation, change_role
from apps.moderation.models import ModerationRole, UserModerationRecord
from apps.notes.models import Note, NoteShare, NoteVote
from apps.notes.services import create_note, create_share, toggle_vote


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        group = self.create_group(users)
        self.create_notes(users, group)
        self.create_friendships(users)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (superuser, moderation ADMIN)')
        self.stdout.write('  alice@example.com / password123')
        self.stdout.write('  bob@example.com / password123')
        self.stdout.write('  charlie@example.com / password123')

    def clear_data(self):
        """Clear all data from the database."""
        NoteVote.objects.all().delete()
        NoteShare.objects.all().delete()
        Note.objects.all().delete()
        GroupInvitation.objects.all().delete()
        GroupMembership.objects.all().delete()
        Group.objects.all().delete()
        Friendship.objects.all().delete()
        UserModerationRecord.objects.all().delete()
        User.objects.filter(email__endswith='@example.com').delete()

    def create_users(self):
        """Create sample users."""
        users = {}

        admin, created = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'display_name': 'Admin',
                'is_staff': True,
                'is_superuser': True,
            }
        )
        if created:
            admin.set_password('admin123')
            admin.save()
        UserModerationRecord.objects.update_or_create(
            user=admin,
            defaults={'role': ModerationRole.ADMIN}
        )
        users['admin'] = admin

        for name in ['alice', 'bob', 'charlie']:
            user, created = User.objects.get_or_create(
                email=f'{name}@example.com',
                defaults={'display_name': name.capitalize()}
            )
            if created:
                user.set_password('password123')
                user.save()
            users[name] = user

        self.stdout.write(f'  Created {len(users)} users')
        return users

    def create_group(self, users):
        group = create_group(
            creator=users['alice'],
            name='Reading Club',
            description='Shared notes for the monthly book'
        )

        invitation = invite_user_by_email(
            group_id=group.id,
            requester=users['alice'],
            target_email=users['bob'].email
        )
        respond_to_invitation(invitation_id=invitation.id, user=users['bob'], accept=True)
        change_role(
            group_id=group.id,
            requester=users['alice'],
            target_user_id=users['bob'].id,
            new_role='ADMIN'
        )

        invite_user_by_email(
            group_id=group.id,
            requester=users['bob'],
            target_email=users['charlie'].email
        )

        self.stdout.write(f'  Created group {group.name}')
        return group

    def create_notes(self, users, group):
        private = create_note(
            owner=users['alice'],
            title='Groceries',
            content='Milk, eggs, bread'
        )
        chapter = create_note(
            owner=users['bob'],
            title='Chapter 1 summary',
            content='The story opens in a small harbour town.',
            group_id=group.id
        )

        create_share(
            note_id=private.id,
            owner=users['alice'],
            recipient_email=users['charlie'].email,
            permission='READ',
            notify=False
        )
        toggle_vote(note_id=chapter.id, user=users['alice'])

        self.stdout.write('  Created 2 notes, 1 share and 1 vote')

    def create_friendships(self, users):
        friendship = invite_friend(requester=users['alice'], target_email=users['bob'].email)
        accept_friend(friendship_id=friendship.id, accepter_email=users['bob'].email)
        invite_friend(requester=users['charlie'], target_email=users['alice'].email)

        self.stdout.write('  Created 2 friendships')
