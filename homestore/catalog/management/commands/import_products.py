"""
Management command to import products from a CSV file
"""
import os
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from homestore.core.exceptions import DomainError
from homestore.catalog.importer import import_products, IMPORT_COLUMNS


class Command(BaseCommand):
    help = "Imports products from a CSV file (columns: " + ", ".join(IMPORT_COLUMNS) + ")"

    def add_arguments(self, parser):
        parser.add_argument('csv_file', type=str, help='Path to the CSV file')
        parser.add_argument(
            '--user',
            type=str,
            default=None,
            help='Username recorded as the creator of the imported products',
        )

    def handle(self, *args, **options):
        csv_file = options['csv_file']
        if not os.path.exists(csv_file):
            raise CommandError(f"CSV file not found at {csv_file}")

        user = None
        if options['user']:
            user = get_user_model().objects.filter(username=options['user']).first()
            if user is None:
                raise CommandError(f"User '{options['user']}' does not exist")

        self.stdout.write(self.style.SUCCESS("=" * 80))
        self.stdout.write(self.style.SUCCESS("IMPORTING PRODUCTS FROM CSV"))
        self.stdout.write(self.style.SUCCESS("=" * 80))
        self.stdout.write(f"CSV File: {csv_file}")

        with open(csv_file, 'rb') as f:
            content = f.read()

        try:
            job = import_products(content, user=user)
        except DomainError as e:
            raise CommandError(e.message)

        for error in job.errors:
            self.stdout.write(self.style.ERROR(f"  ✗ Row {error['row']} ({error['field']}): {error['message']}"))

        self.stdout.write(self.style.SUCCESS("\n" + "=" * 80))
        self.stdout.write(self.style.SUCCESS("SUMMARY"))
        self.stdout.write(self.style.SUCCESS("=" * 80))
        self.stdout.write(f"Job: #{job.pk} ({job.status})")
        self.stdout.write(f"Rows: {job.total_rows}")
        self.stdout.write(f"Products Imported: {job.success_count}")
        if job.error_count:
            self.stdout.write(self.style.ERROR(f"Rows with Errors: {job.error_count}"))
