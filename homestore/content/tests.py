"""
Test suite for the content module
Tests: services, projects and blog posts (slugs, galleries, main image, bulk delete, API)
"""
from django.test import TestCase
from rest_framework import status
from homestore.core.exceptions import DomainError, SlugConflictError, ReferencedError
from homestore.core.revalidation import RecordingInvalidator
from homestore.core.test_utils import TestDataFactory, AuthenticatedAPIClient, use_recording_invalidator
from homestore.content.models import Service, ServiceAsset, Post, PostAsset
from homestore.content.services import SERVICE, PROJECT, POST, save_content, delete_content, bulk_delete_content


class ContentServiceTests(TestCase):
    def setUp(self):
        self.invalidator = RecordingInvalidator()

    def test_service_slug_derived_from_title(self):
        service = save_content(SERVICE, {'title': 'Thiết kế nội thất'}, invalidator=self.invalidator)
        self.assertEqual(service.slug, 'thiet-ke-noi-that')

    def test_duplicate_slug_rejected(self):
        TestDataFactory.create_project(slug='villa-renovation')
        with self.assertRaises(SlugConflictError):
            save_content(PROJECT, {'title': 'Villa', 'slug': 'villa-renovation'}, invalidator=self.invalidator)

    def test_same_slug_allowed_across_kinds(self):
        TestDataFactory.create_service(slug='consulting')
        post = save_content(POST, {'title': 'Consulting', 'slug': 'consulting'}, invalidator=self.invalidator)
        self.assertEqual(post.slug, 'consulting')

    def test_primary_gallery_image_becomes_main_image(self):
        first = TestDataFactory.create_asset()
        second = TestDataFactory.create_asset()
        images = [{'asset_id': first.pk}, {'asset_id': second.pk, 'is_primary': True}]
        service = save_content(SERVICE, {'title': 'Curtains', 'images': images}, invalidator=self.invalidator)
        self.assertEqual(service.image, second)
        rows = list(ServiceAsset.objects.filter(service=service).values_list('asset_id', 'position', 'is_primary'))
        self.assertEqual(rows, [(first.pk, 0, False), (second.pk, 1, True)])

    def test_first_image_is_primary_when_none_flagged(self):
        first = TestDataFactory.create_asset()
        second = TestDataFactory.create_asset()
        images = [{'asset_id': first.pk}, {'asset_id': second.pk}]
        post = save_content(POST, {'title': 'News', 'images': images}, invalidator=self.invalidator)
        self.assertEqual(post.featured_image, first)
        self.assertEqual(PostAsset.objects.filter(post=post, is_primary=True).count(), 1)

    def test_empty_gallery_clears_main_image(self):
        asset = TestDataFactory.create_asset()
        project = TestDataFactory.create_project(image=asset)
        project = save_content(PROJECT, {'images': []}, instance=project, invalidator=self.invalidator)
        project.refresh_from_db()
        self.assertIsNone(project.image)

    def test_update_without_images_keeps_gallery(self):
        asset = TestDataFactory.create_asset()
        service = save_content(SERVICE, {'title': 'Lighting', 'images': [{'asset_id': asset.pk}]},
                               invalidator=self.invalidator)
        save_content(SERVICE, {'title': 'Lighting Design'}, instance=service, invalidator=self.invalidator)
        service.refresh_from_db()
        self.assertEqual(service.title, 'Lighting Design')
        self.assertEqual(service.image, asset)
        self.assertEqual(service.gallery.count(), 1)

    def test_missing_gallery_asset_rejected(self):
        with self.assertRaises(DomainError):
            save_content(SERVICE, {'title': 'Broken', 'images': [{'asset_id': 999999}]}, invalidator=self.invalidator)
        self.assertFalse(Service.objects.filter(title='Broken').exists())

    def test_service_change_revalidates_menu(self):
        with self.captureOnCommitCallbacks(execute=True):
            save_content(SERVICE, {'title': 'Styling'}, invalidator=self.invalidator)
        self.assertEqual(self.invalidator.tags, {'services', 'menu'})

    def test_post_change_revalidates_posts(self):
        with self.captureOnCommitCallbacks(execute=True):
            save_content(POST, {'title': 'Spring trends'}, invalidator=self.invalidator)
        self.assertEqual(self.invalidator.tags, {'posts'})

    def test_delete_removes_gallery_rows(self):
        asset = TestDataFactory.create_asset()
        service = save_content(SERVICE, {'title': 'Flooring', 'images': [{'asset_id': asset.pk}]},
                               invalidator=self.invalidator)
        delete_content(SERVICE, service, invalidator=self.invalidator)
        self.assertFalse(ServiceAsset.objects.exists())

    def test_bulk_delete(self):
        posts = [TestDataFactory.create_post() for _ in range(3)]
        deleted = bulk_delete_content(POST, [posts[0].pk, posts[1].pk], invalidator=self.invalidator)
        self.assertEqual(deleted, 2)
        self.assertEqual(list(Post.objects.values_list('pk', flat=True)), [posts[2].pk])

    def test_service_in_menu_is_cascade_deleted(self):
        from homestore.homepage.models import NavMenuItem
        service = TestDataFactory.create_service()
        NavMenuItem.objects.create(item_type='service', service=service, position=0)
        delete_content(SERVICE, service, invalidator=self.invalidator)
        self.assertFalse(NavMenuItem.objects.exists())

    def test_asset_used_as_main_image_cannot_be_deleted(self):
        from homestore.media.services import delete_asset
        asset = TestDataFactory.create_asset()
        TestDataFactory.create_post(featured_image=asset)
        with self.assertRaises(ReferencedError):
            delete_asset(asset)


class ContentAPITests(TestCase):
    def setUp(self):
        self.invalidator = use_recording_invalidator(self)
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_requires_authentication(self):
        self.client.logout()
        response = self.client.get('/api/v1/services/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_services_with_search(self):
        TestDataFactory.create_service(title='Kitchen Design')
        TestDataFactory.create_service(title='Garden')
        response = self.client.get('/api/v1/services/', {'search': 'kitchen'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([s['title'] for s in response.data['data']], ['Kitchen Design'])
        self.assertEqual(response.data['meta']['totalItems'], 1)

    def test_create_post(self):
        asset = TestDataFactory.create_asset()
        data = {
            'title': 'How to pick a sofa',
            'excerpt': 'A short guide',
            'content_html': '<p>Measure first.</p>',
            'images': [{'asset_id': asset.pk}],
        }
        response = self.client.post('/api/v1/posts/', data, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['slug'], 'how-to-pick-a-sofa')
        self.assertEqual(response.data['featured_image']['id'], asset.pk)
        self.assertEqual(len(response.data['gallery']), 1)

    def test_create_with_invalid_slug(self):
        response = self.client.post('/api/v1/projects/', {'title': 'Loft', 'slug': 'Loft_1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('slug', response.data['details'])

    def test_patch_project(self):
        project = TestDataFactory.create_project(title='Loft')
        response = self.client.patch(f'/api/v1/projects/{project.pk}/', {'is_active': False}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['is_active'])
        self.assertEqual(response.data['title'], 'Loft')

    def test_delete_service(self):
        service = TestDataFactory.create_service()
        response = self.client.delete(f'/api/v1/services/{service.pk}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Service.objects.exists())

    def test_bulk_delete_projects(self):
        projects = [TestDataFactory.create_project() for _ in range(2)]
        response = self.client.post('/api/v1/projects/bulk-delete/', {'ids': [p.pk for p in projects]}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['deleted'], 2)

    def test_missing_detail_returns_404(self):
        response = self.client.get('/api/v1/posts/999999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
