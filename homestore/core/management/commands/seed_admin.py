"""
Management command to create (or reset) the first admin account
Usage: python manage.py seed_admin --username admin --password secret
Falls back to ADMIN_USERNAME / ADMIN_PASSWORD / ADMIN_EMAIL from the environment.
"""
import os
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

User = get_user_model()


class Command(BaseCommand):
    help = 'Create the admin user, or reset its password and role if it already exists'

    def add_arguments(self, parser):
        parser.add_argument('--username', default=os.getenv('ADMIN_USERNAME', 'admin'))
        parser.add_argument('--password', default=os.getenv('ADMIN_PASSWORD'))
        parser.add_argument('--email', default=os.getenv('ADMIN_EMAIL', ''))
        parser.add_argument('--name', default='Administrator')

    def handle(self, *args, **options):
        username = options['username']
        password = options['password']
        if not password:
            raise CommandError('A password is required (--password or ADMIN_PASSWORD).')

        with transaction.atomic():
            user, created = User.objects.get_or_create(
                username=username,
                defaults={'email': options['email'], 'name': options['name']},
            )
            user.role = 'admin'
            user.is_active = True
            user.is_staff = True
            user.is_superuser = True
            user.set_password(password)
            user.save()

        if created:
            self.stdout.write(self.style.SUCCESS(f'✓ Created admin user "{username}"'))
        else:
            self.stdout.write(self.style.SUCCESS(f'✓ Reset admin user "{username}"'))
