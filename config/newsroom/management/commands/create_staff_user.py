"""
Management command: create a site user together with its author profile.

Usage:
    python manage.py create_staff_user --email ama@ghnewsmedia.com \
        --password 's3cret-pass' --name "Ama Mensah" --role editor
"""

from django.contrib.auth.models import User
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from newsroom.models import AuthorProfile, DASHBOARD_ROLES, UserRole


class Command(BaseCommand):
    help = 'Create a user account with an author profile and staff role.'

    def add_arguments(self, parser):
        parser.add_argument('--email', required=True, help='Login e-mail (also used as username).')
        parser.add_argument('--password', required=True, help='Initial password.')
        parser.add_argument('--name', required=True, help='Byline shown on articles.')
        parser.add_argument(
            '--role',
            choices=UserRole.values,
            default=UserRole.EDITOR,
            help='Staff role (default: editor).',
        )
        parser.add_argument('--bio', default='', help='Short author biography.')
        parser.add_argument('--title', default='', help='Job title, e.g. "Senior Reporter".')

    def handle(self, *args, **options):
        email = options['email'].strip().lower()
        if User.objects.filter(username=email).exists():
            raise CommandError(f'User "{email}" already exists.')

        role = options['role']
        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=options['password'],
                is_staff=role in DASHBOARD_ROLES,
                is_superuser=role == UserRole.ADMIN,
            )
            AuthorProfile.objects.create(
                user=user,
                name=options['name'],
                bio=options['bio'],
                title=options['title'],
                role=role,
            )

        self.stdout.write(self.style.SUCCESS(f'✓ Created {role} "{email}" ({options["name"]})'))
