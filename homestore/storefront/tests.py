"""
Test suite for the storefront module
Tests: revalidation endpoint, tag cache, localized pages, search and the contact/subscribe forms
"""
from decimal import Decimal
from unittest import mock
from django.core.cache import cache
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient
from homestore.core.models import InboxMessage
from homestore.core.test_utils import TestDataFactory
from homestore.catalog.models import RecommendedProduct
from homestore.homepage.models import HomepageSaleProduct, NavMenuItem, SaleSectionSettings
from homestore.storefront.cache import cached_query, revalidate_tag, get_tag_version

STOREFRONT_URLS = 'homestore.config.urls_storefront'


class TagCacheTests(TestCase):
    def setUp(self):
        cache.clear()
        self.calls = 0

    def test_cached_until_tag_revalidated(self):
        @cached_query('counter', tags=['products'])
        def counter():
            self.calls += 1
            return {'calls': self.calls}

        self.assertEqual(counter(), {'calls': 1})
        self.assertEqual(counter(), {'calls': 1})
        revalidate_tag('products')
        self.assertEqual(counter(), {'calls': 2})

    def test_unrelated_tag_keeps_cache(self):
        @cached_query('counter', tags=['products'])
        def counter():
            self.calls += 1
            return self.calls

        counter()
        revalidate_tag('posts')
        self.assertEqual(counter(), 1)

    def test_arguments_are_part_of_the_key(self):
        @cached_query('echo', tags=['catalogs'])
        def echo(slug, locale):
            self.calls += 1
            return f'{slug}:{locale}'

        self.assertEqual(echo('sofas', 'en'), 'sofas:en')
        self.assertEqual(echo('sofas', 'vi'), 'sofas:vi')
        self.assertEqual(self.calls, 2)

    def test_version_increments(self):
        self.assertEqual(get_tag_version('menu'), 1)
        self.assertEqual(revalidate_tag('menu'), 2)
        self.assertEqual(get_tag_version('menu'), 2)

    @mock.patch('homestore.storefront.cache._uses_redis', return_value=True)
    @mock.patch('django_redis.get_redis_connection')
    def test_redis_keys_for_tag_removed(self, get_connection, uses_redis):
        redis_conn = get_connection.return_value
        redis_conn.scan_iter.return_value = [b'homestore:1:storefront:|products|:home:abc']
        self.assertEqual(revalidate_tag('products'), 2)
        redis_conn.scan_iter.assert_called_once_with(match='*storefront:*|products|*', count=100)
        redis_conn.delete.assert_called_once_with(b'homestore:1:storefront:|products|:home:abc')

    @mock.patch('homestore.storefront.cache._uses_redis', return_value=True)
    @mock.patch('django_redis.get_redis_connection', side_effect=ConnectionError('redis down'))
    def test_redis_failure_still_bumps_version(self, get_connection, uses_redis):
        self.assertEqual(revalidate_tag('menu'), 2)
        self.assertEqual(get_tag_version('menu'), 2)


@override_settings(ROOT_URLCONF=STOREFRONT_URLS, REVALIDATION_SECRET='s3cret')
class RevalidateEndpointTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()

    def post(self, body, token='s3cret'):
        headers = {'HTTP_AUTHORIZATION': f'Bearer {token}'} if token else {}
        return self.client.post('/api/revalidate/', body, format='json', **headers)

    def test_revalidates_string_tags(self):
        response = self.post({'tags': ['products', '', 7, 'menu']})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['revalidated'], ['products', 'menu'])
        self.assertIn('timestamp', response.data)
        self.assertEqual(get_tag_version('products'), 2)

    def test_wrong_secret(self):
        response = self.post({'tags': ['products']}, token='nope')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['error'], 'Unauthorized')

    def test_non_ascii_secret_rejected(self):
        response = self.post({'tags': ['products']}, token='s3crét')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['error'], 'Unauthorized')
        self.assertEqual(get_tag_version('products'), 1)

    def test_missing_header(self):
        response = self.post({'tags': ['products']}, token=None)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_empty_tags(self):
        response = self.post({'tags': []})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Invalid request: tags must be a non-empty array')

    def test_tags_not_a_list(self):
        response = self.post({'tags': 'products'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    @override_settings(REVALIDATION_SECRET='')
    def test_secret_not_configured(self):
        response = self.post({'tags': ['products']})
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data['error'], 'Server configuration error')


@override_settings(ROOT_URLCONF=STOREFRONT_URLS)
class StorefrontPageTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.living = TestDataFactory.create_catalog(name='Living Room', name_vi='Phòng khách', slug='living-room')
        self.sofas = TestDataFactory.create_subcatalog(parent=self.living, name='Sofas', name_vi='Ghế sofa', slug='sofas')

    def test_catalog_name_is_localized(self):
        response = self.client.get('/api/catalog/sofas/', {'locale': 'vi'})
        self.assertEqual(response.data['name'], 'Ghế sofa')
        response = self.client.get('/api/catalog/sofas/', {'locale': 'en'})
        self.assertEqual(response.data['name'], 'Sofas')

    def test_locale_cookie_and_default(self):
        self.client.cookies['locale'] = 'en'
        self.assertEqual(self.client.get('/api/catalog/sofas/').data['name'], 'Sofas')
        del self.client.cookies['locale']
        self.assertEqual(self.client.get('/api/catalog/sofas/').data['name'], 'Ghế sofa')

    def test_level_one_catalog_lists_subcatalogs_with_active_products(self):
        active = TestDataFactory.create_product(catalog=self.sofas, name='Active')
        TestDataFactory.create_product(catalog=self.sofas, name='Hidden', is_active=False)
        response = self.client.get('/api/catalog/living-room/', {'locale': 'en'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        subcatalog = response.data['subcatalogs'][0]
        self.assertEqual(subcatalog['slug'], 'sofas')
        self.assertEqual([p['id'] for p in subcatalog['products']], [active.pk])

    def test_level_two_catalog_sorting(self):
        cheap = TestDataFactory.create_product(catalog=self.sofas, base_price=Decimal('300.00'))
        pricey = TestDataFactory.create_product(catalog=self.sofas, base_price=Decimal('900.00'))
        discounted = TestDataFactory.create_product(
            catalog=self.sofas, base_price=Decimal('1000.00'), discount_price=Decimal('100.00')
        )
        response = self.client.get('/api/catalog/sofas/', {'sort': 'price_asc'})
        self.assertEqual([p['id'] for p in response.data['products']], [discounted.pk, cheap.pk, pricey.pk])
        response = self.client.get('/api/catalog/sofas/', {'sort': 'price_desc'})
        self.assertEqual([p['id'] for p in response.data['products']], [pricey.pk, cheap.pk, discounted.pk])

    def test_unknown_catalog_returns_404(self):
        response = self.client.get('/api/catalog/missing/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_product_page_with_breadcrumb_and_recommendations(self):
        product = TestDataFactory.create_product(catalog=self.sofas, slug='velvet-sofa')
        TestDataFactory.add_product_image(product, position=0)
        other = TestDataFactory.create_product(catalog=self.sofas)
        hidden = TestDataFactory.create_product(catalog=self.sofas, is_active=False)
        RecommendedProduct.objects.create(source_product=product, recommended_product=hidden, position=0)
        RecommendedProduct.objects.create(source_product=product, recommended_product=other, position=1)
        response = self.client.get('/api/product/velvet-sofa/', {'locale': 'en'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([c['slug'] for c in response.data['breadcrumb']], ['living-room', 'sofas'])
        self.assertEqual([p['id'] for p in response.data['recommended']], [other.pk])
        self.assertEqual(len(response.data['gallery']), 1)

    def test_inactive_product_not_found(self):
        TestDataFactory.create_product(slug='retired', is_active=False)
        response = self.client.get('/api/product/retired/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_sale_page_in_position_order(self):
        first = TestDataFactory.create_product(discount_price=Decimal('10.00'))
        second = TestDataFactory.create_product(discount_price=Decimal('10.00'))
        HomepageSaleProduct.objects.create(product=second, position=0)
        HomepageSaleProduct.objects.create(product=first, position=1)
        SaleSectionSettings.objects.create(title='SUMMER SALES')
        response = self.client.get('/api/sale/')
        self.assertEqual([p['id'] for p in response.data['products']], [second.pk, first.pk])

    def test_home_hides_inactive_sale_section(self):
        SaleSectionSettings.objects.create(title='SALE', is_active=False)
        response = self.client.get('/api/home/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['sale'])
        self.assertIsNone(response.data['hero'])

    def test_menu_catalog_item_lists_children(self):
        NavMenuItem.objects.create(item_type='catalog', catalog=self.living, position=0)
        service = TestDataFactory.create_service(title='Interior Design', slug='interior-design')
        NavMenuItem.objects.create(item_type='service', service=service, position=1)
        response = self.client.get('/api/menu/', {'locale': 'en'})
        menu = response.data['data']
        self.assertEqual(menu[0]['type'], 'catalog')
        self.assertEqual(menu[0]['children'], [{'label': 'Sofas', 'slug': 'sofas'}])
        self.assertEqual(menu[1], {'type': 'service', 'label': 'Interior Design', 'slug': 'interior-design', 'children': []})

    def test_inactive_blog_post_hidden(self):
        TestDataFactory.create_post(slug='draft', is_active=False)
        visible = TestDataFactory.create_post(slug='published')
        self.assertEqual(self.client.get('/api/blogs/draft/').status_code, status.HTTP_404_NOT_FOUND)
        response = self.client.get('/api/blogs/')
        self.assertEqual([p['id'] for p in response.data['data']], [visible.pk])

    def test_search(self):
        TestDataFactory.create_product(name='Oak Table', slug='oak-table')
        TestDataFactory.create_product(name='Oak Chair', slug='oak-chair', is_active=False)
        for index in range(12):
            TestDataFactory.create_product(name=f'Lamp {index}')
        self.assertEqual([p['slug'] for p in self.client.get('/api/search/', {'q': 'OAK'}).data['data']], ['oak-table'])
        self.assertEqual(len(self.client.get('/api/search/', {'q': 'lamp'}).data['data']), 10)
        self.assertEqual(self.client.get('/api/search/', {'q': ''}).data['data'], [])


@override_settings(ROOT_URLCONF=STOREFRONT_URLS)
class StorefrontFormTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_contact_strips_leading_zeros(self):
        data = {
            'name': 'Lan',
            'phone_country': '+84',
            'phone_number': '0901234567',
            'email': '',
            'content': 'I would like a quote for a sofa.',
        }
        response = self.client.post('/api/contact/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        message = InboxMessage.objects.get()
        self.assertEqual(message.phone_number, '+84901234567')
        self.assertIsNone(message.email)

    def test_contact_validation(self):
        data = {'name': 'L', 'phone_number': '123', 'content': 'short'}
        response = self.client.post('/api/contact/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(set(response.data['details']), {'name', 'phone_number', 'content'})
        self.assertFalse(InboxMessage.objects.exists())

    def test_subscribe_with_email(self):
        response = self.client.post('/api/subscribe/', {'contact': 'lan@example.com'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        message = InboxMessage.objects.get()
        self.assertEqual(message.email, 'lan@example.com')
        self.assertEqual(message.phone_number, 'N/A')

    def test_subscribe_with_phone(self):
        response = self.client.post('/api/subscribe/', {'contact': '+84 901 234 567'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(InboxMessage.objects.get().phone_number, '+84 901 234 567')

    def test_subscribe_rejects_garbage(self):
        response = self.client.post('/api/subscribe/', {'contact': 'hello'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
