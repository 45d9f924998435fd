"""
Test suite for the media module
Tests: logo overlay placement and compositing, overlay settings, asset upload and delete
"""
import io
from unittest import mock
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from PIL import Image
from rest_framework import status
from homestore.core.exceptions import DomainError, ReferencedError
from homestore.core.models import SiteSetting
from homestore.core.test_utils import TestDataFactory, AuthenticatedAPIClient, use_recording_invalidator
from homestore.media.models import Asset
from homestore.media.overlay import (
    DEFAULT_SETTINGS, SETTINGS_KEY, OverlayError,
    compute_logo_position, apply_logo_overlay, get_overlay_settings, save_overlay_settings, watermark_image_bytes,
)
from homestore.media.services import create_asset, delete_asset, watermark_asset, update_overlay_settings
from homestore.media.storage import StorageError


def make_image(size=(200, 100), color=(255, 255, 255), mode='RGB', fmt='JPEG'):
    output = io.BytesIO()
    Image.new(mode, size, color).save(output, format=fmt)
    return output.getvalue()


class LogoPositionTests(TestCase):
    def test_corners(self):
        base, logo = (1000, 800), (150, 50)
        self.assertEqual(compute_logo_position('top-left', base, logo, 20), (20, 20))
        self.assertEqual(compute_logo_position('top-right', base, logo, 20), (830, 20))
        self.assertEqual(compute_logo_position('bottom-left', base, logo, 20), (20, 730))
        self.assertEqual(compute_logo_position('bottom-right', base, logo, 20), (830, 730))

    def test_center_ignores_padding(self):
        self.assertEqual(compute_logo_position('center', (1000, 800), (150, 50), 20), (425, 375))

    def test_unknown_position_falls_back_to_top_right(self):
        self.assertEqual(compute_logo_position('middle', (1000, 800), (150, 50), 20), (830, 20))

    def test_never_negative(self):
        self.assertEqual(compute_logo_position('bottom-right', (100, 40), (90, 40), 20), (0, 0))


class LogoOverlayTests(TestCase):
    def test_output_is_jpeg_of_same_size(self):
        result = apply_logo_overlay(make_image((400, 300)), make_image((100, 50), mode='RGBA', fmt='PNG', color=(255, 0, 0, 255)))
        image = Image.open(io.BytesIO(result))
        self.assertEqual(image.format, 'JPEG')
        self.assertEqual(image.size, (400, 300))

    def test_logo_scaled_to_percentage_of_width(self):
        logo = make_image((100, 50), mode='RGBA', fmt='PNG', color=(255, 0, 0, 255))
        result = apply_logo_overlay(
            make_image((400, 300)), logo, size_percent=25, opacity=100, position='top-left', padding=0
        )
        image = Image.open(io.BytesIO(result)).convert('RGB')
        # logo is 100x50 after scaling to 25% of 400px
        red, green, blue = image.getpixel((50, 25))
        self.assertGreater(red, 200)
        self.assertLess(green, 60)
        red, green, blue = image.getpixel((150, 100))
        self.assertGreater(green, 200)

    def test_zero_opacity_leaves_image_untouched(self):
        logo = make_image((100, 50), mode='RGBA', fmt='PNG', color=(255, 0, 0, 255))
        result = apply_logo_overlay(make_image((400, 300)), logo, opacity=0, position='top-left', padding=0)
        red, green, blue = Image.open(io.BytesIO(result)).convert('RGB').getpixel((10, 10))
        self.assertGreater(green, 200)

    def test_unreadable_image(self):
        with self.assertRaises(OverlayError):
            apply_logo_overlay(b'not an image', make_image())


class OverlaySettingsTests(TestCase):
    def test_defaults(self):
        settings = get_overlay_settings()
        self.assertFalse(settings['enabled'])
        self.assertEqual(settings['position'], 'top-right')
        self.assertEqual(settings['size_percent'], 15)
        self.assertEqual(settings['opacity'], 80)
        self.assertEqual(settings['padding'], 20)

    def test_save_merges_and_ignores_unknown_keys(self):
        save_overlay_settings({'opacity': 50, 'colour': 'red'})
        stored = SiteSetting.objects.get(key=SETTINGS_KEY).value
        self.assertEqual(stored['opacity'], 50)
        self.assertEqual(stored['size_percent'], 15)
        self.assertNotIn('colour', stored)

    def test_disabled_overlay_returns_original_bytes(self):
        original = make_image()
        data, processed = watermark_image_bytes(original, dict(DEFAULT_SETTINGS))
        self.assertIs(data, original)
        self.assertFalse(processed)

    def test_logo_asset_sets_logo_url(self):
        invalidator = use_recording_invalidator(self)
        logo = TestDataFactory.create_asset(filename='logo.png', mime_type='image/png')
        with self.captureOnCommitCallbacks(execute=True):
            merged = update_overlay_settings({'enabled': True, 'logo_asset_id': logo.pk})
        self.assertEqual(merged['logo_url'], logo.url)
        self.assertEqual(invalidator.calls, [['settings']])


class AssetServiceTests(TestCase):
    @mock.patch('homestore.media.services.upload_file')
    def test_create_asset_records_row(self, upload_file):
        upload_file.return_value = 'https://cdn.test/products/chair.jpg'
        asset = create_asset(b'12345', 'chair.jpg', content_type='image/jpeg', folder='products', alt_text='Chair')
        upload_file.assert_called_once_with(b'12345', 'chair.jpg', content_type='image/jpeg', folder='products')
        self.assertEqual(asset.url, 'https://cdn.test/products/chair.jpg')
        self.assertEqual(asset.size, 5)
        self.assertEqual(asset.alt_text, 'Chair')

    @mock.patch('homestore.media.services.upload_file')
    def test_storage_failure(self, upload_file):
        upload_file.side_effect = StorageError('Failed to upload asset')
        with self.assertRaises(DomainError) as ctx:
            create_asset(b'12345', 'chair.jpg', content_type='image/jpeg')
        self.assertEqual(ctx.exception.status_code, 502)
        self.assertFalse(Asset.objects.exists())

    @mock.patch('homestore.media.services.fetch_bytes')
    @mock.patch('homestore.media.services.upload_file')
    def test_upload_with_overlay_becomes_jpeg(self, upload_file, fetch_bytes):
        upload_file.return_value = 'https://cdn.test/products/chair.jpg'
        save_overlay_settings({'enabled': True, 'logo_url': 'https://cdn.test/logo.png'})
        with mock.patch('homestore.media.overlay.fetch_bytes') as fetch_logo:
            fetch_logo.return_value = make_image((50, 50), mode='RGBA', fmt='PNG', color=(0, 0, 0, 255))
            asset = create_asset(make_image(fmt='PNG'), 'chair.png', content_type='image/png', apply_overlay=True)
        self.assertEqual(asset.filename, 'chair.jpg')
        self.assertEqual(asset.mime_type, 'image/jpeg')
        fetch_bytes.assert_not_called()

    @mock.patch('homestore.media.services.delete_file')
    def test_delete_asset_removes_file(self, delete_file):
        asset = TestDataFactory.create_asset()
        delete_asset(asset)
        self.assertFalse(Asset.objects.filter(pk=asset.pk).exists())
        delete_file.assert_called_once_with(asset.url)

    @mock.patch('homestore.media.services.delete_file')
    def test_referenced_asset_is_kept(self, delete_file):
        asset = TestDataFactory.create_asset()
        TestDataFactory.create_collection(banner=asset)
        with self.assertRaises(ReferencedError):
            delete_asset(asset)
        self.assertTrue(Asset.objects.filter(pk=asset.pk).exists())
        delete_file.assert_not_called()

    def test_watermark_rejects_non_images(self):
        asset = TestDataFactory.create_asset(filename='manual.pdf', mime_type='application/pdf')
        with self.assertRaises(DomainError):
            watermark_asset(asset)

    def test_watermark_disabled_returns_same_asset(self):
        asset = TestDataFactory.create_asset()
        result, processed = watermark_asset(asset)
        self.assertEqual(result, asset)
        self.assertFalse(processed)


class MediaAPITests(TestCase):
    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_user())

    def test_requires_authentication(self):
        self.client.logout()
        response = self.client.get('/api/v1/assets/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    @mock.patch('homestore.media.services.upload_file')
    def test_upload(self, upload_file):
        upload_file.return_value = 'https://cdn.test/uploads/sofa.jpg'
        upload = SimpleUploadedFile('sofa.jpg', make_image(), content_type='image/jpeg')
        response = self.client.post('/api/v1/assets/upload/', {'file': upload, 'alt_text': 'Sofa'}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['url'], 'https://cdn.test/uploads/sofa.jpg')
        self.assertEqual(response.data['mime_type'], 'image/jpeg')

    def test_upload_without_file(self):
        response = self.client.post('/api/v1/assets/upload/', {}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('file', response.data['details'])

    def test_list_filters_by_type(self):
        TestDataFactory.create_asset(filename='a.jpg')
        TestDataFactory.create_asset(filename='b.pdf', mime_type='application/pdf')
        response = self.client.get('/api/v1/assets/', {'type': 'image/'})
        self.assertEqual([a['filename'] for a in response.data['data']], ['a.jpg'])

    @mock.patch('homestore.media.services.delete_file')
    def test_delete_referenced_asset(self, delete_file):
        asset = TestDataFactory.create_asset()
        TestDataFactory.create_collection(banner=asset)
        response = self.client.delete(f'/api/v1/assets/{asset.pk}/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_overlay_settings_validation(self):
        response = self.client.put('/api/v1/settings/logo-overlay/', {'size_percent': 80}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.put('/api/v1/settings/logo-overlay/', {'position': 'middle'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_overlay_settings_roundtrip(self):
        response = self.client.put(
            '/api/v1/settings/logo-overlay/', {'enabled': True, 'position': 'center', 'opacity': 60}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        response = self.client.get('/api/v1/settings/logo-overlay/')
        self.assertEqual(response.data['position'], 'center')
        self.assertEqual(response.data['opacity'], 60)
        self.assertEqual(response.data['padding'], 20)
