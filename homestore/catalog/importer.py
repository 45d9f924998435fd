"""
CSV product import.

Row 1 is the header, so data rows are reported from row 2. Every row is
validated first; valid rows are then written in a single transaction and
the ProductImportJob row records progress and per-row errors.
"""
import csv
import io
import logging
import math
from decimal import Decimal, InvalidOperation

from django.db import DatabaseError, transaction
from django.utils import timezone

from homestore.core.exceptions import DomainError
from homestore.core.revalidation import schedule_revalidation, TAG_PRODUCTS, TAG_CATALOGS, TAG_SALE
from homestore.core.utils import SLUG_PATTERN, slugify, create_notification
from .models import Catalog, Product, ProductImportJob
from .services import sync_sale_membership

logger = logging.getLogger(__name__)

IMPORT_COLUMNS = [
    'name', 'slug', 'catalog', 'base_price', 'discount_price', 'short_description', 'description',
    'width', 'height', 'depth', 'unit', 'is_active', 'name_vi', 'short_description_vi', 'description_vi',
]
REQUIRED_COLUMNS = ['name', 'base_price']
DIMENSION_COLUMNS = ['width', 'height', 'depth', 'unit']
TRUE_VALUES = {'true', '1', 'yes'}
PROGRESS_EVERY = 10
MAX_PRICE = Decimal('100000000')  # decimal(10, 2)
NAME_MAX_LENGTH = Product._meta.get_field('name').max_length
SLUG_MAX_LENGTH = Product._meta.get_field('slug').max_length

EXAMPLE_ROW = {
    'name': 'Example Product Name',
    'slug': 'example-product-name',
    'catalog': 'Subcatalog Name',
    'base_price': '199.99',
    'discount_price': '',
    'short_description': 'Short description',
    'description': 'Full product description here',
    'width': '100',
    'height': '50',
    'depth': '30',
    'unit': 'cm',
    'is_active': 'true',
    'name_vi': 'Tên sản phẩm',
    'short_description_vi': 'Mô tả ngắn',
    'description_vi': 'Mô tả đầy đủ',
}


class RowError(Exception):
    def __init__(self, field, message):
        super().__init__(message)
        self.field = field
        self.message = message


def read_csv(content):
    """Rows from CSV bytes or text. Header names are trimmed and lowercased."""
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8-sig')
        except UnicodeDecodeError:
            raise DomainError('The file must be UTF-8 encoded CSV.')

    reader = csv.DictReader(io.StringIO(content))
    if not reader.fieldnames:
        raise DomainError('No data rows found in the file')
    reader.fieldnames = [(name or '').strip().lower() for name in reader.fieldnames]

    missing = [column for column in REQUIRED_COLUMNS if column not in reader.fieldnames]
    if missing:
        raise DomainError(f"Missing required columns: {', '.join(missing)}")

    rows = [
        {key: (value or '').strip() for key, value in row.items() if key}
        for row in reader
    ]
    rows = [row for row in rows if any(row.values())]
    if not rows:
        raise DomainError('No data rows found in the file')
    return rows


def template_csv(catalog_name=None):
    """Header plus one example row"""
    example = dict(EXAMPLE_ROW)
    if catalog_name:
        example['catalog'] = catalog_name
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=IMPORT_COLUMNS)
    writer.writeheader()
    writer.writerow(example)
    return output.getvalue()


def _parse_decimal(value, field, label, required=False):
    if not value:
        if required:
            raise RowError(field, f'{label} is required')
        return None
    try:
        number = Decimal(value.replace(',', ''))
    except InvalidOperation:
        raise RowError(field, f'{label} must be a number')
    if not number.is_finite() or number < 0:
        raise RowError(field, f'{label} must be a positive number')
    if number >= MAX_PRICE:
        raise RowError(field, f'{label} is too large')
    return number.quantize(Decimal('0.01'))


def _parse_dimensions(row):
    """All four dimension columns or none of them"""
    values = {column: row.get(column, '') for column in DIMENSION_COLUMNS}
    if not any(values.values()):
        return None
    if not all(values.values()):
        raise RowError('dimensions', 'If any dimension is provided, all 4 fields are required')

    dimensions = {'unit': values['unit']}
    for column in ['width', 'height', 'depth']:
        try:
            number = float(values[column])
        except ValueError:
            raise RowError('dimensions', f'{column} must be a number')
        if not math.isfinite(number) or number <= 0:
            raise RowError('dimensions', f'{column} must be a positive number')
        dimensions[column] = number
    return dimensions


def parse_is_active(value):
    if not value:
        return True
    return value.strip().lower() in TRUE_VALUES


class ProductImporter:
    """Validates CSV rows and writes the valid ones"""

    def __init__(self, user=None, invalidator=None):
        self.user = user if getattr(user, 'is_authenticated', False) else None
        self.invalidator = invalidator
        self.catalogs_by_name = {}
        self.catalogs_by_slug = {}
        for catalog in Catalog.objects.filter(level=2):
            self.catalogs_by_name.setdefault(catalog.name.lower(), catalog)
            self.catalogs_by_slug[catalog.slug.lower()] = catalog
        self.existing_slugs = set(Product.objects.values_list('slug', flat=True))
        self.file_slugs = set()

    def validate_row(self, row):
        name = row.get('name', '')
        if not name:
            raise RowError('name', 'Name is required')
        if len(name) > NAME_MAX_LENGTH:
            raise RowError('name', f'Name must be at most {NAME_MAX_LENGTH} characters')
        if len(row.get('name_vi') or '') > NAME_MAX_LENGTH:
            raise RowError('name_vi', f'Vietnamese name must be at most {NAME_MAX_LENGTH} characters')

        slug = row.get('slug') or slugify(name)
        if len(slug) > SLUG_MAX_LENGTH:
            raise RowError('slug', f'Slug must be at most {SLUG_MAX_LENGTH} characters')
        if not SLUG_PATTERN.match(slug):
            raise RowError('slug', 'Slug must be lowercase and kebab-case')
        if slug in self.file_slugs:
            raise RowError('slug', f'Duplicate slug "{slug}" found in import file')
        if slug in self.existing_slugs:
            raise RowError('slug', f'Slug "{slug}" already exists in database')

        base_price = _parse_decimal(row.get('base_price', ''), 'base_price', 'Base price', required=True)
        discount_price = _parse_decimal(row.get('discount_price', ''), 'discount_price', 'Discount price')

        catalog = None
        catalog_name = row.get('catalog', '')
        if catalog_name:
            key = catalog_name.lower()
            catalog = self.catalogs_by_name.get(key) or self.catalogs_by_slug.get(key)
            if catalog is None:
                raise RowError('catalog', f'Catalog "{catalog_name}" not found')

        dimensions = _parse_dimensions(row)

        self.file_slugs.add(slug)
        return Product(
            name=name,
            name_vi=row.get('name_vi') or None,
            slug=slug,
            catalog=catalog,
            description=row.get('description') or None,
            description_vi=row.get('description_vi') or None,
            short_description=row.get('short_description') or None,
            short_description_vi=row.get('short_description_vi') or None,
            base_price=base_price,
            discount_price=discount_price,
            is_active=parse_is_active(row.get('is_active', '')),
            dimensions=dimensions,
            created_by=self.user,
        )

    def run(self, rows):
        job = ProductImportJob.objects.create(
            status='processing',
            total_rows=len(rows),
            created_by=self.user,
        )
        logger.info(f"Import job {job.pk} started with {len(rows)} rows")

        errors = []
        valid = []
        for index, row in enumerate(rows):
            row_number = index + 2
            try:
                valid.append(self.validate_row(row))
            except RowError as e:
                errors.append({'row': row_number, 'field': e.field, 'message': e.message})

            if index % PROGRESS_EVERY == 0:
                ProductImportJob.objects.filter(pk=job.pk).update(processed_rows=index + 1)

        sale_changed = False
        try:
            with transaction.atomic():
                for product in valid:
                    product.save()
                    sale_changed = sync_sale_membership(product) or sale_changed
        except DatabaseError as e:
            logger.error(f"Import job {job.pk} failed: {str(e)}")
            job.status = 'failed'
            job.processed_rows = len(rows)
            job.error_count = len(errors) + 1
            job.errors = errors + [{'row': 0, 'field': '', 'message': 'Database error: Failed to import products.'}]
            job.completed_at = timezone.now()
            job.save()
            return job

        job.status = 'completed'
        job.processed_rows = len(rows)
        job.success_count = len(valid)
        job.error_count = len(errors)
        job.errors = errors
        job.completed_at = timezone.now()
        job.save()
        logger.info(f"Import job {job.pk} completed: {job.success_count} imported, {job.error_count} errors")

        if valid:
            tags = [TAG_PRODUCTS, TAG_CATALOGS] + ([TAG_SALE] if sale_changed else [])
            schedule_revalidation(tags, self.invalidator)

        create_notification(
            type='system',
            title='Product import completed',
            message=f'{job.success_count} products imported, {job.error_count} errors.',
            link='/products/import',
            creator=self.user,
        )
        return job


def import_products(content, user=None, invalidator=None):
    """Import products from CSV content and return the finished job"""
    rows = read_csv(content)
    return ProductImporter(user=user, invalidator=invalidator).run(rows)
