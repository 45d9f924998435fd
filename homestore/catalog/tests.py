"""
Test suite for the catalog module
Tests: catalog levels, product catalog rule, sale sync, slugs, galleries, bulk delete and CSV import
"""
from decimal import Decimal
from unittest import mock

import requests
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from rest_framework import status
from homestore.core.exceptions import DomainError, SlugConflictError, ReferencedError, REFERENCED_MESSAGE
from homestore.core.revalidation import RecordingInvalidator, StorefrontRevalidator, set_cache_invalidator
from homestore.core.test_utils import TestDataFactory, AuthenticatedAPIClient, use_recording_invalidator
from homestore.core.utils import bulk_delete
from homestore.homepage.models import HomepageSaleProduct
from homestore.media.models import Asset
from homestore.catalog.importer import import_products, read_csv, template_csv, IMPORT_COLUMNS
from homestore.catalog.models import Catalog, Product, ProductAsset, RecommendedProduct, CatalogCollection
from homestore.catalog import services


class CatalogLevelTests(TestCase):
    """Catalog level is derived from the parent"""

    def setUp(self):
        self.invalidator = RecordingInvalidator()

    def test_top_level_catalog_is_level_one(self):
        catalog = services.save_catalog({'name': 'Living Room'}, invalidator=self.invalidator)
        self.assertEqual(catalog.level, 1)
        self.assertIsNone(catalog.parent)

    def test_child_catalog_is_level_two(self):
        parent = services.save_catalog({'name': 'Living Room'}, invalidator=self.invalidator)
        child = services.save_catalog({'name': 'Sofas', 'parent_id': parent.pk}, invalidator=self.invalidator)
        self.assertEqual(child.level, 2)
        self.assertEqual(child.parent, parent)

    def test_removing_parent_makes_level_one(self):
        parent = TestDataFactory.create_catalog()
        child = TestDataFactory.create_subcatalog(parent=parent)
        self.assertEqual(child.level, 2)
        child = services.save_catalog({'parent_id': None}, catalog=child, invalidator=self.invalidator)
        child.refresh_from_db()
        self.assertEqual(child.level, 1)

    def test_parent_must_be_level_one(self):
        child = TestDataFactory.create_subcatalog()
        with self.assertRaises(DomainError):
            services.save_catalog({'name': 'Too deep', 'parent_id': child.pk}, invalidator=self.invalidator)
        self.assertFalse(Catalog.objects.filter(name='Too deep').exists())

    def test_catalog_cannot_be_its_own_parent(self):
        catalog = TestDataFactory.create_catalog()
        with self.assertRaises(DomainError):
            services.save_catalog({'parent_id': catalog.pk}, catalog=catalog, invalidator=self.invalidator)

    def test_catalog_with_children_cannot_get_a_parent(self):
        other = TestDataFactory.create_catalog()
        parent = TestDataFactory.create_catalog()
        TestDataFactory.create_subcatalog(parent=parent)
        with self.assertRaises(DomainError):
            services.save_catalog({'parent_id': other.pk}, catalog=parent, invalidator=self.invalidator)

    def test_level_is_rederived_on_every_save(self):
        catalog = TestDataFactory.create_catalog()
        catalog.level = 2
        catalog.save()
        catalog.refresh_from_db()
        self.assertEqual(catalog.level, 1)

    def test_collection_links_replaced(self):
        first = TestDataFactory.create_collection()
        second = TestDataFactory.create_collection()
        catalog = services.save_catalog({'name': 'Bedroom', 'collection_ids': [first.pk]}, invalidator=self.invalidator)
        services.save_catalog({'collection_ids': [second.pk]}, catalog=catalog, invalidator=self.invalidator)
        linked = list(CatalogCollection.objects.filter(catalog=catalog).values_list('collection_id', flat=True))
        self.assertEqual(linked, [second.pk])


class SlugRuleTests(TestCase):
    def setUp(self):
        self.invalidator = RecordingInvalidator()

    def test_slug_derived_from_vietnamese_name(self):
        catalog = services.save_catalog({'name': 'Bàn Ghế Đẹp'}, invalidator=self.invalidator)
        self.assertEqual(catalog.slug, 'ban-ghe-dep')

    def test_duplicate_slug_rejected_without_write(self):
        TestDataFactory.create_catalog(slug='sofas')
        count = Catalog.objects.count()
        with self.assertRaises(SlugConflictError) as ctx:
            services.save_catalog({'name': 'Sofas', 'slug': 'sofas'}, invalidator=self.invalidator)
        self.assertEqual(ctx.exception.message, 'Slug already exists.')
        self.assertEqual(Catalog.objects.count(), count)

    def test_update_keeps_own_slug(self):
        product = TestDataFactory.create_product(slug='oak-table')
        product = services.save_product(
            {'name': 'Oak Table XL', 'slug': 'oak-table'}, product=product, invalidator=self.invalidator
        )
        self.assertEqual(product.slug, 'oak-table')

    def test_update_to_taken_slug_rejected(self):
        TestDataFactory.create_product(slug='oak-table')
        product = TestDataFactory.create_product(slug='pine-table', name='Pine Table')
        with self.assertRaises(SlugConflictError):
            services.save_product({'slug': 'oak-table'}, product=product, invalidator=self.invalidator)
        product.refresh_from_db()
        self.assertEqual(product.slug, 'pine-table')


class ProductServiceTests(TestCase):
    """Product catalog rule, sale sync and galleries"""

    def setUp(self):
        self.invalidator = RecordingInvalidator()
        self.parent = TestDataFactory.create_catalog()
        self.subcatalog = TestDataFactory.create_subcatalog(parent=self.parent)

    def product_data(self, **overrides):
        data = {'name': f'Chair {TestDataFactory.random_string(4)}', 'base_price': Decimal('250.00')}
        data.update(overrides)
        return data

    def test_product_accepts_level_two_catalog(self):
        product = services.save_product(self.product_data(catalog_id=self.subcatalog.pk), invalidator=self.invalidator)
        self.assertEqual(product.catalog, self.subcatalog)

    def test_product_rejects_level_one_catalog(self):
        count = Product.objects.count()
        with self.assertRaises(DomainError):
            services.save_product(self.product_data(catalog_id=self.parent.pk), invalidator=self.invalidator)
        self.assertEqual(Product.objects.count(), count)

    def test_update_rejects_level_one_catalog(self):
        product = TestDataFactory.create_product(catalog=self.subcatalog)
        with self.assertRaises(DomainError):
            services.save_product({'catalog_id': self.parent.pk}, product=product, invalidator=self.invalidator)
        product.refresh_from_db()
        self.assertEqual(product.catalog, self.subcatalog)

    def test_discount_adds_product_to_sale_section(self):
        existing = TestDataFactory.create_product()
        HomepageSaleProduct.objects.create(product=existing, position=4)
        product = services.save_product(
            self.product_data(discount_price=Decimal('199.00')), invalidator=self.invalidator
        )
        entry = HomepageSaleProduct.objects.get(product=product)
        self.assertEqual(entry.position, 5)

    def test_first_sale_product_gets_position_zero(self):
        product = services.save_product(
            self.product_data(discount_price=Decimal('10.00')), invalidator=self.invalidator
        )
        self.assertEqual(HomepageSaleProduct.objects.get(product=product).position, 0)

    def test_sale_entry_not_duplicated(self):
        product = services.save_product(
            self.product_data(discount_price=Decimal('199.00')), invalidator=self.invalidator
        )
        services.save_product({'discount_price': Decimal('150.00')}, product=product, invalidator=self.invalidator)
        self.assertEqual(HomepageSaleProduct.objects.filter(product=product).count(), 1)

    def test_clearing_discount_removes_from_sale_section(self):
        product = services.save_product(
            self.product_data(discount_price=Decimal('199.00')), invalidator=self.invalidator
        )
        services.save_product({'discount_price': None}, product=product, invalidator=self.invalidator)
        self.assertFalse(HomepageSaleProduct.objects.filter(product=product).exists())

    def test_sale_tag_only_when_sale_table_changes(self):
        with self.captureOnCommitCallbacks(execute=True):
            product = services.save_product(self.product_data(), invalidator=self.invalidator)
        self.assertEqual(self.invalidator.calls[-1], ['products'])

        with self.captureOnCommitCallbacks(execute=True):
            services.save_product({'discount_price': Decimal('5.00')}, product=product, invalidator=self.invalidator)
        self.assertEqual(self.invalidator.calls[-1], ['products', 'sale'])

    def test_gallery_primary_defaults_to_first_image(self):
        first = TestDataFactory.create_asset()
        second = TestDataFactory.create_asset()
        product = services.save_product(
            self.product_data(images=[{'asset_id': first.pk}, {'asset_id': second.pk}]),
            invalidator=self.invalidator,
        )
        gallery = list(ProductAsset.objects.filter(product=product).order_by('position'))
        self.assertEqual([item.asset_id for item in gallery], [first.pk, second.pk])
        self.assertEqual([item.is_primary for item in gallery], [True, False])

    def test_gallery_keeps_flagged_primary(self):
        first = TestDataFactory.create_asset()
        second = TestDataFactory.create_asset()
        product = services.save_product(
            self.product_data(images=[{'asset_id': first.pk}, {'asset_id': second.pk, 'is_primary': True}]),
            invalidator=self.invalidator,
        )
        self.assertEqual(product.primary_image().asset_id, second.pk)

    def test_gallery_replaced_on_update(self):
        old = TestDataFactory.create_asset()
        new = TestDataFactory.create_asset()
        product = services.save_product(self.product_data(images=[{'asset_id': old.pk}]), invalidator=self.invalidator)
        services.save_product({'images': [{'asset_id': new.pk}]}, product=product, invalidator=self.invalidator)
        self.assertEqual(list(product.gallery.values_list('asset_id', flat=True)), [new.pk])

    def test_missing_gallery_asset_rejected(self):
        with self.assertRaises(DomainError):
            services.save_product(self.product_data(images=[{'asset_id': 999999}]), invalidator=self.invalidator)

    def test_recommended_products_drop_self_and_duplicates(self):
        product = TestDataFactory.create_product()
        first = TestDataFactory.create_product()
        second = TestDataFactory.create_product()
        result = services.set_recommended_products(
            product, [second.pk, product.pk, first.pk, second.pk], invalidator=self.invalidator
        )
        self.assertEqual([p.pk for p in result], [second.pk, first.pk])
        positions = list(
            RecommendedProduct.objects.filter(source_product=product).values_list('recommended_product_id', 'position')
        )
        self.assertEqual(positions, [(second.pk, 0), (first.pk, 1)])


class BulkDeleteTests(TestCase):
    def setUp(self):
        self.invalidator = RecordingInvalidator()

    def test_bulk_delete_removes_exactly_matching_rows(self):
        products = [TestDataFactory.create_product() for _ in range(3)]
        deleted = services.bulk_delete_products([products[0].pk, products[2].pk], invalidator=self.invalidator)
        self.assertEqual(deleted, 2)
        self.assertEqual(list(Product.objects.values_list('pk', flat=True)), [products[1].pk])

    def test_bulk_delete_ignores_unknown_ids(self):
        product = TestDataFactory.create_product()
        deleted = services.bulk_delete_products([product.pk, 999999], invalidator=self.invalidator)
        self.assertEqual(deleted, 1)

    def test_bulk_delete_requires_ids(self):
        with self.assertRaises(DomainError):
            services.bulk_delete_products([], invalidator=self.invalidator)

    def test_referenced_row_fails_whole_batch(self):
        banner = TestDataFactory.create_asset()
        free = TestDataFactory.create_asset()
        TestDataFactory.create_collection(banner=banner)
        with self.assertRaises(ReferencedError) as ctx:
            bulk_delete(Asset, [free.pk, banner.pk], 'asset')
        self.assertEqual(ctx.exception.message, REFERENCED_MESSAGE)
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(Asset.objects.filter(pk__in=[free.pk, banner.pk]).count(), 2)

    def test_deleting_product_removes_sale_entry(self):
        product = TestDataFactory.create_product(discount_price=Decimal('9.00'))
        HomepageSaleProduct.objects.create(product=product, position=0)
        services.delete_product(product, invalidator=self.invalidator)
        self.assertFalse(HomepageSaleProduct.objects.exists())


class CatalogAPITests(TestCase):
    """Catalog, product and collection endpoints"""

    def setUp(self):
        self.invalidator = use_recording_invalidator(self)
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.parent = TestDataFactory.create_catalog(name='Living Room')
        self.subcatalog = TestDataFactory.create_subcatalog(parent=self.parent, name='Sofas')

    def test_requires_authentication(self):
        self.client.logout()
        response = self.client.get('/api/v1/catalogs/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_catalogs_returns_data_and_meta(self):
        response = self.client.get('/api/v1/catalogs/', {'limit': 1})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['data']), 1)
        self.assertEqual(response.data['meta'], {'totalItems': 2, 'totalPages': 2, 'currentPage': 1, 'limit': 1})

    def test_filter_catalogs_by_level(self):
        response = self.client.get('/api/v1/catalogs/', {'level': 2})
        self.assertEqual([c['id'] for c in response.data['data']], [self.subcatalog.pk])

    def test_create_catalog_ignores_supplied_level(self):
        response = self.client.post('/api/v1/catalogs/', {'name': 'Kitchen', 'level': 2}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['level'], 1)
        self.assertEqual(response.data['slug'], 'kitchen')

    def test_create_catalog_invalid_fields(self):
        response = self.client.post('/api/v1/catalogs/', {'slug': 'Bad Slug'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid fields')
        self.assertIn('name', response.data['details'])
        self.assertIn('slug', response.data['details'])

    def test_create_catalog_duplicate_slug(self):
        response = self.client.post('/api/v1/catalogs/', {'name': 'Sofas', 'slug': self.subcatalog.slug}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Slug already exists.')

    def test_catalog_detail_lists_children(self):
        response = self.client.get(f'/api/v1/catalogs/{self.parent.pk}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([c['id'] for c in response.data['children']], [self.subcatalog.pk])

    def test_toggle_show_on_home(self):
        response = self.client.post(f'/api/v1/catalogs/{self.parent.pk}/toggle-home/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['show_on_home'])

    def test_create_product_in_level_one_catalog_rejected(self):
        data = {'name': 'Sofa', 'base_price': '100.00', 'catalog_id': self.parent.pk}
        response = self.client.post('/api/v1/products/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('subcatalog', response.data['error'])

    def test_create_product_with_discount_and_gallery(self):
        asset = TestDataFactory.create_asset()
        data = {
            'name': 'Velvet Sofa',
            'base_price': '1200.00',
            'discount_price': '999.00',
            'catalog_id': self.subcatalog.pk,
            'dimensions': {'width': 200, 'height': 90, 'depth': 95, 'unit': 'cm'},
            'images': [{'asset_id': asset.pk, 'focus_point': {'x': 50, 'y': 40}}],
        }
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post('/api/v1/products/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'velvet-sofa')
        self.assertTrue(response.data['in_sale_section'])
        self.assertEqual(response.data['gallery'][0]['focus_point'], {'x': 50.0, 'y': 40.0})
        self.assertIn('sale', self.invalidator.tags)

    def test_product_saved_when_invalidator_raises(self):
        broken = mock.Mock()
        broken.invalidate.side_effect = RuntimeError('storefront down')
        set_cache_invalidator(broken)
        data = {'name': 'Walnut Desk', 'base_price': '450.00', 'catalog_id': self.subcatalog.pk}
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post('/api/v1/products/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Product.objects.filter(slug='walnut-desk').exists())
        broken.invalidate.assert_called_once()

    @mock.patch('homestore.core.revalidation.requests.post')
    def test_product_saved_when_storefront_unreachable(self, post):
        post.side_effect = requests.ConnectionError('refused')
        set_cache_invalidator(StorefrontRevalidator(
            base_url='http://shop.test', secret='s3cret', max_retries=3, base_delay=0, sleep=lambda seconds: None
        ))
        data = {'name': 'Walnut Shelf', 'base_price': '150.00', 'catalog_id': self.subcatalog.pk}
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post('/api/v1/products/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Product.objects.filter(slug='walnut-shelf').exists())
        self.assertEqual(post.call_count, 3)

    def test_filter_products_on_sale(self):
        on_sale = TestDataFactory.create_product(discount_price=Decimal('5.00'))
        TestDataFactory.create_product()
        response = self.client.get('/api/v1/products/', {'on_sale': 'true'})
        self.assertEqual([p['id'] for p in response.data['data']], [on_sale.pk])

    def test_delete_product(self):
        product = TestDataFactory.create_product()
        response = self.client.delete(f'/api/v1/products/{product.pk}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Product.objects.filter(pk=product.pk).exists())

    def test_bulk_delete_endpoint(self):
        products = [TestDataFactory.create_product() for _ in range(2)]
        response = self.client.post(
            '/api/v1/products/bulk-delete/', {'ids': [p.pk for p in products]}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['deleted'], 2)

    def test_bulk_delete_endpoint_rejects_empty_list(self):
        response = self.client.post('/api/v1/products/bulk-delete/', {'ids': []}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_replace_recommended_products(self):
        product = TestDataFactory.create_product()
        other = TestDataFactory.create_product()
        response = self.client.put(
            f'/api/v1/products/{product.pk}/recommended/', {'product_ids': [other.pk, product.pk]}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['id'] for p in response.data['data']], [other.pk])

    def test_create_collection_with_links(self):
        product = TestDataFactory.create_product(catalog=self.subcatalog)
        data = {'name': 'Summer Picks', 'product_ids': [product.pk], 'catalog_ids': [self.parent.pk]}
        response = self.client.post('/api/v1/collections/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual([p['id'] for p in response.data['products']], [product.pk])
        self.assertEqual([c['id'] for c in response.data['catalogs']], [self.parent.pk])

    def test_mutation_creates_broadcast_notification(self):
        self.client.post('/api/v1/catalogs/', {'name': 'Office'}, format='json')
        notification = self.user.created_notifications.get()
        self.assertEqual(notification.type, 'entity_created')
        self.assertIsNone(notification.user)
        self.assertIn('Office', notification.message)


class ProductImportTests(TestCase):
    """CSV product import"""

    HEADER = 'name,slug,catalog,base_price,discount_price,width,height,depth,unit,is_active\n'

    def setUp(self):
        self.invalidator = RecordingInvalidator()
        self.subcatalog = TestDataFactory.create_subcatalog(name='Dining Chairs', slug='dining-chairs')

    def run_import(self, body):
        return import_products((self.HEADER + body).encode('utf-8'), invalidator=self.invalidator)

    def test_valid_rows_are_imported(self):
        job = self.run_import(
            'Oak Chair,oak-chair,Dining Chairs,120.50,,45,90,50,cm,true\n'
            'Pine Chair,,dining chairs,99,,,,,,no\n'
        )
        self.assertEqual(job.status, 'completed')
        self.assertEqual(job.success_count, 2)
        self.assertEqual(job.error_count, 0)
        oak = Product.objects.get(slug='oak-chair')
        self.assertEqual(oak.catalog, self.subcatalog)
        self.assertEqual(oak.dimensions, {'unit': 'cm', 'width': 45.0, 'height': 90.0, 'depth': 50.0})
        pine = Product.objects.get(slug='pine-chair')
        self.assertFalse(pine.is_active)

    def test_row_errors_are_numbered_from_two(self):
        job = self.run_import(
            'Oak Chair,oak-chair,,120,,,,,,\n'
            'Oak Chair Copy,oak-chair,,120,,,,,,\n'
        )
        self.assertEqual(job.success_count, 1)
        self.assertEqual(job.errors, [
            {'row': 3, 'field': 'slug', 'message': 'Duplicate slug "oak-chair" found in import file'},
        ])

    def test_existing_slug_rejected(self):
        TestDataFactory.create_product(slug='oak-chair')
        job = self.run_import('Oak Chair,oak-chair,,120,,,,,,\n')
        self.assertEqual(job.success_count, 0)
        self.assertEqual(job.errors[0]['message'], 'Slug "oak-chair" already exists in database')

    def test_catalog_must_be_level_two(self):
        TestDataFactory.create_catalog(name='Dining')
        job = self.run_import('Oak Chair,oak-chair,Dining,120,,,,,,\n')
        self.assertEqual(job.errors[0]['field'], 'catalog')

    def test_partial_dimensions_rejected(self):
        job = self.run_import('Oak Chair,oak-chair,,120,,45,,,cm,\n')
        self.assertEqual(job.errors[0]['field'], 'dimensions')

    def test_invalid_price_rejected(self):
        job = self.run_import('Oak Chair,oak-chair,,abc,,,,,,\n')
        self.assertEqual(job.errors[0]['field'], 'base_price')

    def test_discounted_rows_join_sale_section(self):
        with self.captureOnCommitCallbacks(execute=True):
            self.run_import('Oak Chair,oak-chair,,120,100,,,,,\n')
        self.assertTrue(HomepageSaleProduct.objects.filter(product__slug='oak-chair').exists())
        self.assertEqual(self.invalidator.tags, {'products', 'catalogs', 'sale'})

    def test_overlong_name_is_a_row_error(self):
        long_name = 'Oak ' + 'x' * 300
        job = self.run_import(
            f'{long_name},oak-chair,,120,,,,,,\n'
            'Pine Chair,pine-chair,,99,,,,,,\n'
        )
        self.assertEqual(job.status, 'completed')
        self.assertEqual(job.success_count, 1)
        self.assertEqual(job.errors, [
            {'row': 2, 'field': 'name', 'message': 'Name must be at most 255 characters'},
        ])
        self.assertTrue(Product.objects.filter(slug='pine-chair').exists())

    def test_overlong_slug_is_a_row_error(self):
        job = self.run_import(f"Oak Chair,{'a' * 256},,120,,,,,,\n")
        self.assertEqual(job.success_count, 0)
        self.assertEqual(job.errors[0]['field'], 'slug')

    def test_catalog_name_wins_over_another_catalogs_slug(self):
        armchairs = TestDataFactory.create_subcatalog(name='Armchairs', slug='armchair-range')
        lounge = TestDataFactory.create_subcatalog(name='Lounge', slug='armchairs')
        self.run_import(
            'Club Chair,club-chair,Armchairs,300,,,,,,\n'
            'Wing Chair,wing-chair,armchair-range,300,,,,,,\n'
            'Daybed,daybed,Lounge,500,,,,,,\n'
        )
        self.assertEqual(Product.objects.get(slug='club-chair').catalog, armchairs)
        self.assertEqual(Product.objects.get(slug='wing-chair').catalog, armchairs)
        self.assertEqual(Product.objects.get(slug='daybed').catalog, lounge)

    def test_missing_required_column(self):
        with self.assertRaises(DomainError):
            read_csv(b'name,slug\nOak,oak\n')

    def test_empty_file_rejected(self):
        with self.assertRaises(DomainError):
            read_csv(self.HEADER.encode('utf-8'))

    def test_template_has_header_and_example(self):
        lines = template_csv('Dining Chairs').strip().splitlines()
        self.assertEqual(lines[0].split(','), IMPORT_COLUMNS)
        self.assertIn('Dining Chairs', lines[1])

    def test_upload_endpoint(self):
        use_recording_invalidator(self)
        client = AuthenticatedAPIClient()
        client.authenticate_user(TestDataFactory.create_user())
        upload = SimpleUploadedFile(
            'products.csv', (self.HEADER + 'Oak Chair,oak-chair,,120,,,,,,\n').encode('utf-8'), content_type='text/csv'
        )
        response = client.post('/api/v1/products/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['success_count'], 1)

        status_response = client.get(f"/api/v1/products/import/{response.data['id']}/")
        self.assertEqual(status_response.data['status'], 'completed')
