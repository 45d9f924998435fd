"""
Test suite for the homepage module
Tests: hero/intro/footer upserts, site contacts, navigation menu, featured layout and the sale section
"""
from decimal import Decimal
from django.test import TestCase
from rest_framework import status
from homestore.core.exceptions import DomainError
from homestore.core.revalidation import RecordingInvalidator
from homestore.core.test_utils import TestDataFactory, AuthenticatedAPIClient, use_recording_invalidator
from homestore.homepage.models import (
    SiteHero, FooterAddress, FooterSocialLink, SiteContact, FeaturedCatalogRow, FeaturedCatalogRowItem,
    SaleSectionSettings, HomepageSaleProduct, NavMenuItem,
)
from homestore.homepage import services


class HeroIntroFooterTests(TestCase):
    def setUp(self):
        self.invalidator = RecordingInvalidator()

    def test_image_hero_requires_background_image(self):
        with self.assertRaises(DomainError) as ctx:
            services.save_hero({'background_type': 'image', 'title': 'Welcome'}, invalidator=self.invalidator)
        self.assertEqual(ctx.exception.message, 'Background media is required')
        self.assertFalse(SiteHero.objects.exists())

    def test_video_hero_requires_background_video(self):
        image = TestDataFactory.create_asset()
        with self.assertRaises(DomainError):
            services.save_hero(
                {'background_type': 'video', 'background_image_id': image.pk}, invalidator=self.invalidator
            )

    def test_hero_is_upserted_in_place(self):
        image = TestDataFactory.create_asset()
        first = services.save_hero(
            {'background_type': 'image', 'background_image_id': image.pk, 'title': 'One'},
            invalidator=self.invalidator,
        )
        second = services.save_hero({'background_type': 'image', 'title': 'Two'}, invalidator=self.invalidator)
        self.assertEqual(first.pk, second.pk)
        self.assertEqual(SiteHero.objects.count(), 1)
        self.assertEqual(second.title, 'Two')

    def test_hero_revalidates_hero_tag(self):
        video = TestDataFactory.create_asset(mime_type='video/mp4')
        with self.captureOnCommitCallbacks(execute=True):
            services.save_hero(
                {'background_type': 'video', 'background_video_id': video.pk}, invalidator=self.invalidator
            )
        self.assertEqual(self.invalidator.tags, {'hero'})

    def test_unknown_background_asset_rejected(self):
        with self.assertRaises(DomainError):
            services.save_hero(
                {'background_type': 'image', 'background_image_id': 999999}, invalidator=self.invalidator
            )

    def test_intro_requires_title(self):
        with self.assertRaises(DomainError):
            services.save_intro({'content_html': '<p>Hi</p>'}, invalidator=self.invalidator)

    def test_footer_children_replaced_with_positions(self):
        services.save_footer({
            'intro': 'Quality furniture',
            'addresses': [{'label': 'Showroom', 'address': '1 Main St'}],
        }, invalidator=self.invalidator)
        bundle = services.save_footer({
            'addresses': [
                {'label': 'HQ', 'address': '2 Side St'},
                {'label': 'Warehouse', 'address': '3 Dock Rd'},
            ],
            'social_links': [{'platform': 'facebook', 'url': 'https://facebook.com/shop'}],
        }, invalidator=self.invalidator)
        self.assertEqual(bundle['footer'].intro, 'Quality furniture')
        self.assertEqual(
            list(FooterAddress.objects.values_list('label', 'position')), [('HQ', 0), ('Warehouse', 1)]
        )
        self.assertTrue(FooterSocialLink.objects.get().is_active)

    def test_footer_without_child_keys_keeps_children(self):
        services.save_footer({'addresses': [{'label': 'HQ', 'address': '2 Side St'}]}, invalidator=self.invalidator)
        services.save_footer({'intro': 'Updated'}, invalidator=self.invalidator)
        self.assertEqual(FooterAddress.objects.count(), 1)


class ContactsAndMenuTests(TestCase):
    def setUp(self):
        self.invalidator = RecordingInvalidator()

    def test_empty_contact_values_are_skipped(self):
        contacts = [
            {'type': 'phone', 'value': '0901234567'},
            {'type': 'zalo', 'value': '   '},
            {'type': 'email', 'value': 'shop@example.com', 'label': ''},
        ]
        saved = services.replace_site_contacts(contacts, invalidator=self.invalidator)
        self.assertEqual([(c.type, c.position) for c in saved], [('phone', 0), ('email', 1)])
        self.assertIsNone(SiteContact.objects.get(type='email').label)

    def test_menu_items_resolved_by_level(self):
        parent = TestDataFactory.create_catalog()
        child = TestDataFactory.create_subcatalog(parent=parent)
        service = TestDataFactory.create_service()
        items = services.replace_nav_menu([
            {'item_type': 'catalog', 'catalog_id': parent.pk},
            {'item_type': 'subcatalog', 'catalog_id': child.pk},
            {'item_type': 'service', 'service_id': service.pk},
        ], invalidator=self.invalidator)
        self.assertEqual([(i.item_type, i.position) for i in items],
                         [('catalog', 0), ('subcatalog', 1), ('service', 2)])

    def test_catalog_menu_item_rejects_subcatalog(self):
        child = TestDataFactory.create_subcatalog()
        with self.assertRaises(DomainError):
            services.replace_nav_menu([{'item_type': 'catalog', 'catalog_id': child.pk}], invalidator=self.invalidator)

    def test_failed_menu_replace_keeps_existing_items(self):
        parent = TestDataFactory.create_catalog()
        services.replace_nav_menu([{'item_type': 'catalog', 'catalog_id': parent.pk}], invalidator=self.invalidator)
        with self.assertRaises(DomainError):
            services.replace_nav_menu([{'item_type': 'service', 'service_id': 999999}], invalidator=self.invalidator)
        self.assertEqual(NavMenuItem.objects.count(), 1)

    def test_featured_rows_skip_empty_rows(self):
        first = TestDataFactory.create_catalog()
        second = TestDataFactory.create_catalog()
        rows = services.replace_featured_rows([
            {'columns': 2, 'catalog_ids': [first.pk, second.pk]},
            {'columns': 1, 'catalog_ids': []},
        ], invalidator=self.invalidator)
        self.assertEqual(len(rows), 1)
        self.assertEqual(FeaturedCatalogRow.objects.get().columns, 2)
        self.assertEqual(
            list(FeaturedCatalogRowItem.objects.values_list('catalog_id', 'position')),
            [(first.pk, 0), (second.pk, 1)],
        )

    def test_deleting_catalog_removes_featured_item(self):
        catalog = TestDataFactory.create_catalog()
        services.replace_featured_rows([{'columns': 1, 'catalog_ids': [catalog.pk]}], invalidator=self.invalidator)
        catalog.delete()
        self.assertFalse(FeaturedCatalogRowItem.objects.exists())


class SaleSectionTests(TestCase):
    def setUp(self):
        self.invalidator = RecordingInvalidator()

    def test_settings_auto_created_with_default_title(self):
        settings_row = services.get_sale_settings()
        self.assertEqual(settings_row.title, 'SUMMER SALES')
        self.assertEqual(services.get_sale_settings().pk, settings_row.pk)
        self.assertEqual(SaleSectionSettings.objects.count(), 1)

    def test_add_appends_at_current_count(self):
        first = TestDataFactory.create_product(discount_price=Decimal('10.00'))
        second = TestDataFactory.create_product(discount_price=Decimal('20.00'))
        services.add_sale_product(first.pk, invalidator=self.invalidator)
        entry = services.add_sale_product(second.pk, invalidator=self.invalidator)
        self.assertEqual(entry.position, 1)

    def test_add_twice_rejected(self):
        product = TestDataFactory.create_product(discount_price=Decimal('10.00'))
        services.add_sale_product(product.pk, invalidator=self.invalidator)
        with self.assertRaises(DomainError) as ctx:
            services.add_sale_product(product.pk, invalidator=self.invalidator)
        self.assertEqual(ctx.exception.message, 'Product already in sale section')

    def test_eligible_excludes_listed_inactive_and_full_price(self):
        listed = TestDataFactory.create_product(discount_price=Decimal('10.00'))
        eligible = TestDataFactory.create_product(discount_price=Decimal('10.00'))
        TestDataFactory.create_product(discount_price=Decimal('10.00'), is_active=False)
        TestDataFactory.create_product()
        HomepageSaleProduct.objects.create(product=listed, position=0)
        self.assertEqual([p.pk for p in services.get_eligible_sale_products()], [eligible.pk])

    def test_reorder_rewrites_positions(self):
        products = [TestDataFactory.create_product(discount_price=Decimal('5.00')) for _ in range(3)]
        for index, product in enumerate(products):
            HomepageSaleProduct.objects.create(product=product, position=index)
        with self.captureOnCommitCallbacks(execute=True):
            entries = services.reorder_sale_products(
                [products[2].pk, products[0].pk, products[1].pk], invalidator=self.invalidator
            )
        self.assertEqual([e.product_id for e in entries], [products[2].pk, products[0].pk, products[1].pk])
        self.assertEqual([e.position for e in entries], [0, 1, 2])
        self.assertEqual(self.invalidator.tags, {'sale'})

    def test_reorder_with_unknown_product_keeps_rows(self):
        product = TestDataFactory.create_product(discount_price=Decimal('5.00'))
        HomepageSaleProduct.objects.create(product=product, position=0)
        with self.assertRaises(DomainError):
            services.reorder_sale_products([product.pk, 999999], invalidator=self.invalidator)
        self.assertEqual(HomepageSaleProduct.objects.count(), 1)

    def test_remove(self):
        product = TestDataFactory.create_product(discount_price=Decimal('5.00'))
        HomepageSaleProduct.objects.create(product=product, position=0)
        self.assertEqual(services.remove_sale_product(product.pk, invalidator=self.invalidator), 1)
        self.assertFalse(HomepageSaleProduct.objects.exists())


class HomepageAPITests(TestCase):
    def setUp(self):
        self.invalidator = use_recording_invalidator(self)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_user())

    def test_hero_get_when_empty(self):
        response = self.client.get('/api/v1/homepage/hero/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data)

    def test_hero_put_without_media(self):
        response = self.client.put('/api/v1/homepage/hero/', {'background_type': 'image'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Background media is required')

    def test_featured_columns_validated(self):
        catalog = TestDataFactory.create_catalog()
        response = self.client.put(
            '/api/v1/homepage/featured/', {'rows': [{'columns': 5, 'catalog_ids': [catalog.pk]}]}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid fields')

    def test_sale_add_and_list(self):
        product = TestDataFactory.create_product(discount_price=Decimal('50.00'))
        response = self.client.post('/api/v1/homepage/sale/products/', {'product_id': product.pk}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        response = self.client.get('/api/v1/homepage/sale/products/')
        self.assertEqual([e['product']['id'] for e in response.data['data']], [product.pk])

    def test_sale_add_duplicate(self):
        product = TestDataFactory.create_product(discount_price=Decimal('50.00'))
        HomepageSaleProduct.objects.create(product=product, position=0)
        response = self.client.post('/api/v1/homepage/sale/products/', {'product_id': product.pk}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Product already in sale section')

    def test_sale_remove(self):
        product = TestDataFactory.create_product(discount_price=Decimal('50.00'))
        HomepageSaleProduct.objects.create(product=product, position=0)
        response = self.client.delete(f'/api/v1/homepage/sale/products/{product.pk}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_sale_settings_update(self):
        response = self.client.put('/api/v1/homepage/sale/settings/', {'title': 'WINTER DEALS'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'WINTER DEALS')
