"""
Test suite for the core module
Tests: slugs, pagination, revalidation client, notifications, users, inbox, global search and error handling
"""
from io import StringIO
from unittest import mock

import requests
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError
from django.test import TestCase, SimpleTestCase, override_settings
from rest_framework import status
from rest_framework.test import APIRequestFactory
from homestore.core.exceptions import DomainError, custom_exception_handler
from homestore.core.i18n import get_localized_text, normalize_locale
from homestore.core.models import Notification, InboxMessage
from homestore.core.revalidation import (
    StorefrontRevalidator, RecordingInvalidator, revalidate_now, schedule_revalidation,
)
from homestore.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from homestore.core.utils import slugify, is_valid_slug, paginate, create_notification, atomic_mutation

User = get_user_model()


class SlugTests(SimpleTestCase):
    def test_vietnamese_diacritics_folded(self):
        self.assertEqual(slugify('Phòng Ăn Đẹp'), 'phong-an-dep')

    def test_punctuation_and_spaces_collapsed(self):
        self.assertEqual(slugify('  Sofa -- 3 seats!  '), 'sofa-3-seats')

    def test_empty(self):
        self.assertEqual(slugify(None), '')

    def test_slug_pattern(self):
        self.assertTrue(is_valid_slug('oak-table-2'))
        self.assertFalse(is_valid_slug('Oak-Table'))
        self.assertFalse(is_valid_slug('oak--table'))
        self.assertFalse(is_valid_slug('-oak'))


class LocalizationTests(SimpleTestCase):
    def test_vietnamese_value_preferred_when_present(self):
        row = {'name': 'Sofa', 'name_vi': 'Ghế sofa'}
        self.assertEqual(get_localized_text(row, 'name', 'vi'), 'Ghế sofa')
        self.assertEqual(get_localized_text(row, 'name', 'en'), 'Sofa')

    def test_blank_vietnamese_value_falls_back(self):
        self.assertEqual(get_localized_text({'name': 'Sofa', 'name_vi': '  '}, 'name', 'vi'), 'Sofa')

    def test_unknown_locale_defaults_to_vietnamese(self):
        self.assertEqual(normalize_locale('fr'), 'vi')
        self.assertEqual(normalize_locale('EN'), 'en')


class PaginationTests(TestCase):
    def test_meta_block(self):
        for _ in range(3):
            TestDataFactory.create_catalog()
        from homestore.catalog.models import Catalog
        items, meta = paginate(Catalog.objects.order_by('pk'), {'page': '2', 'limit': '2'})
        self.assertEqual(len(items), 1)
        self.assertEqual(meta, {'totalItems': 3, 'totalPages': 2, 'currentPage': 2, 'limit': 2})

    def test_bad_params_fall_back(self):
        from homestore.catalog.models import Catalog
        _, meta = paginate(Catalog.objects.all(), {'page': 'x', 'limit': 'y'})
        self.assertEqual(meta['currentPage'], 1)
        self.assertEqual(meta['limit'], 10)
        self.assertEqual(meta['totalPages'], 0)


def _response(status_code, body=None):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = body or {}
    return response


class StorefrontRevalidatorTests(SimpleTestCase):
    def make(self, **kwargs):
        self.sleeps = []
        options = dict(base_url='http://shop.test', secret='s3cret', timeout=5, max_retries=3, base_delay=1,
                       sleep=self.sleeps.append)
        options.update(kwargs)
        return StorefrontRevalidator(**options)

    @mock.patch('homestore.core.revalidation.requests.post')
    def test_success_first_attempt(self, post):
        post.return_value = _response(200, {'revalidated': ['products']})
        result = self.make().invalidate(['products'])
        self.assertTrue(result.success)
        self.assertEqual(result.attempts, 1)
        self.assertEqual(result.revalidated, ['products'])
        post.assert_called_once_with(
            'http://shop.test/api/revalidate/',
            json={'tags': ['products']},
            headers={'Authorization': 'Bearer s3cret'},
            timeout=5,
        )

    @mock.patch('homestore.core.revalidation.requests.post')
    def test_retries_with_exponential_backoff(self, post):
        post.side_effect = [requests.Timeout(), _response(503), _response(200)]
        result = self.make().invalidate(['menu'])
        self.assertTrue(result.success)
        self.assertEqual(result.attempts, 3)
        self.assertEqual(self.sleeps, [1, 2])

    @mock.patch('homestore.core.revalidation.requests.post')
    def test_gives_up_after_max_retries(self, post):
        post.side_effect = requests.ConnectionError('refused')
        result = self.make().invalidate(['menu'])
        self.assertFalse(result.success)
        self.assertEqual(result.attempts, 3)
        self.assertIn('refused', result.error)

    @mock.patch('homestore.core.revalidation.requests.post')
    def test_unauthorized_stops_immediately(self, post):
        post.return_value = _response(401, {'error': 'Unauthorized'})
        result = self.make().invalidate(['menu'])
        self.assertFalse(result.success)
        self.assertEqual(post.call_count, 1)
        self.assertEqual(self.sleeps, [])

    @mock.patch('homestore.core.revalidation.requests.post')
    def test_non_object_json_body_still_retried(self, post):
        post.side_effect = [_response(502, ['bad gateway']), _response(502, 'bad gateway'), _response(200, ['ok'])]
        result = self.make().invalidate(['menu'])
        self.assertTrue(result.success)
        self.assertEqual(result.attempts, 3)
        self.assertEqual(result.revalidated, ['menu'])
        self.assertEqual(self.sleeps, [1, 2])

    @mock.patch('homestore.core.revalidation.requests.post')
    def test_unparseable_body_reports_status(self, post):
        response = _response(500)
        response.json.side_effect = ValueError('no json')
        post.return_value = response
        result = self.make().invalidate(['menu'])
        self.assertEqual(result.attempts, 3)
        self.assertIn('HTTP 500', result.error)

    @mock.patch('homestore.core.revalidation.requests.post')
    def test_skipped_without_secret_or_tags(self, post):
        self.assertEqual(self.make(secret='').invalidate(['menu']).attempts, 0)
        self.assertEqual(self.make().invalidate([]).attempts, 0)
        post.assert_not_called()

    def test_revalidate_now_never_raises(self):
        broken = mock.Mock()
        broken.invalidate.side_effect = RuntimeError('boom')
        result = revalidate_now(['products'], invalidator=broken)
        self.assertFalse(result.success)


class ScheduleRevalidationTests(TestCase):
    def test_runs_after_commit_with_deduplicated_tags(self):
        invalidator = RecordingInvalidator()
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            schedule_revalidation(['products', 'sale', 'products', ''], invalidator)
            self.assertEqual(invalidator.calls, [])
        self.assertEqual(len(callbacks), 1)
        self.assertEqual(invalidator.calls, [['products', 'sale']])

    def test_rolled_back_transaction_does_not_revalidate(self):
        invalidator = RecordingInvalidator()
        with self.captureOnCommitCallbacks(execute=True):
            with self.assertRaises(DomainError):
                with atomic_mutation('save', 'thing'):
                    schedule_revalidation(['products'], invalidator)
                    raise DomainError('nope')
        self.assertEqual(invalidator.calls, [])


class AtomicMutationTests(TestCase):
    def test_database_error_is_reported(self):
        with self.assertRaises(DomainError) as ctx:
            with atomic_mutation('create', 'product'):
                raise DatabaseError('disk full')
        self.assertEqual(ctx.exception.message, 'Database error: Failed to create product.')
        self.assertEqual(ctx.exception.status_code, 500)


class NotificationTests(TestCase):
    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.other = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_notification_never_raises(self):
        with mock.patch.object(Notification.objects, 'create', side_effect=DatabaseError('down')):
            self.assertIsNone(create_notification('system', 'Title', 'Message'))

    def test_list_includes_own_and_broadcast(self):
        create_notification('system', 'Broadcast', 'For everyone')
        create_notification('system', 'Mine', 'Just me', user=self.user)
        create_notification('system', 'Theirs', 'Not me', user=self.other)
        response = self.client.get('/api/v1/notifications/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual({n['title'] for n in response.data['data']}, {'Broadcast', 'Mine'})
        self.assertEqual(response.data['unread_count'], 2)

    def test_mark_all_read(self):
        create_notification('system', 'Broadcast', 'For everyone')
        response = self.client.post('/api/v1/notifications/read-all/')
        self.assertEqual(response.data['updated'], 1)
        self.assertEqual(self.client.get('/api/v1/notifications/').data['unread_count'], 0)

    def test_cannot_mark_someone_elses_notification(self):
        notification = create_notification('system', 'Theirs', 'Not me', user=self.other)
        response = self.client.post(f'/api/v1/notifications/{notification.pk}/read/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class UserManagementTests(TestCase):
    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_editor_cannot_list_users(self):
        self.client.authenticate_user(TestDataFactory.create_user())
        response = self.client.get('/api/v1/users/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_user(self):
        data = {
            'username': 'newbie',
            'email': 'newbie@example.com',
            'role': 'editor',
            'password': 'Str0ng-Passw0rd!',
            'password_confirm': 'Str0ng-Passw0rd!',
        }
        response = self.client.post('/api/v1/users/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertNotIn('password', response.data)

    def test_cannot_delete_own_account(self):
        response = self.client.delete(f'/api/v1/users/{self.admin.pk}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_other_user(self):
        other = TestDataFactory.create_user()
        response = self.client.delete(f'/api/v1/users/{other.pk}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_me_reports_admin_flag(self):
        response = self.client.get('/api/v1/auth/me/')
        self.assertTrue(response.data['is_admin'])


class AuthTests(TestCase):
    def test_login_token_carries_role(self):
        from rest_framework_simplejwt.tokens import AccessToken
        TestDataFactory.create_user(username='editor1', password='testpass123')
        response = self.client.post('/api/v1/auth/login/', {'username': 'editor1', 'password': 'testpass123'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        token = AccessToken(response.data['access'])
        self.assertEqual(token['username'], 'editor1')
        self.assertEqual(token['role'], 'editor')


class InboxAndSearchTests(TestCase):
    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_user())

    def test_inbox_filter_unread(self):
        InboxMessage.objects.create(name='A', phone_number='1', content='hello there', is_read=True)
        unread = InboxMessage.objects.create(name='B', phone_number='2', content='hello again')
        response = self.client.get('/api/v1/inbox/', {'unread': 'true'})
        self.assertEqual([m['id'] for m in response.data['data']], [unread.pk])

    def test_inbox_mark_read_and_delete(self):
        message = InboxMessage.objects.create(name='A', phone_number='1', content='hello there')
        self.client.post(f'/api/v1/inbox/{message.pk}/read/')
        message.refresh_from_db()
        self.assertTrue(message.is_read)
        response = self.client.delete(f'/api/v1/inbox/{message.pk}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_global_search_requires_two_characters(self):
        TestDataFactory.create_product(name='Oak Table')
        response = self.client.get('/api/v1/search/', {'q': 'o'})
        self.assertEqual(response.data['products'], [])

    def test_global_search_groups_hits(self):
        TestDataFactory.create_product(name='Oak Table')
        TestDataFactory.create_post(title='Caring for oak')
        response = self.client.get('/api/v1/search/', {'q': 'oak'})
        self.assertEqual(len(response.data['products']), 1)
        self.assertEqual(len(response.data['posts']), 1)
        self.assertEqual(response.data['catalogs'], [])


class ExceptionHandlerTests(SimpleTestCase):
    def test_domain_error_mapped(self):
        response = custom_exception_handler(DomainError('Nope', status_code=409), {})
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data, {'error': 'Nope'})

    @override_settings(DEBUG=False)
    def test_unexpected_api_error_sanitized(self):
        from rest_framework.exceptions import APIException
        request = APIRequestFactory().get('/api/v1/anything/')
        response = custom_exception_handler(APIException('secret detail'), {'request': request})
        self.assertEqual(response.data['error'], 'An error occurred processing your request.')


class SeedAdminCommandTests(TestCase):
    def test_creates_admin(self):
        call_command('seed_admin', username='owner', password='pw-12345', stdout=StringIO())
        user = User.objects.get(username='owner')
        self.assertEqual(user.role, 'admin')
        self.assertTrue(user.is_superuser)
        self.assertTrue(user.check_password('pw-12345'))

    def test_resets_existing_user(self):
        TestDataFactory.create_user(username='owner', role='editor')
        call_command('seed_admin', username='owner', password='new-pass', stdout=StringIO())
        user = User.objects.get(username='owner')
        self.assertEqual(user.role, 'admin')
        self.assertTrue(user.check_password('new-pass'))
        self.assertEqual(User.objects.filter(username='owner').count(), 1)

    def test_password_required(self):
        with self.assertRaises(CommandError):
            call_command('seed_admin', username='owner', password='', stdout=StringIO())
