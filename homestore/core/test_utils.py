"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from homestore.core.revalidation import RecordingInvalidator, set_cache_invalidator
from homestore.media.models import Asset
from homestore.catalog.models import Catalog, Product, ProductAsset, Collection
from homestore.content.models import Service, Project, Post
from decimal import Decimal
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def random_slug(prefix='item'):
        return f'{prefix}-{TestDataFactory.random_string(6).lower()}'

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', role='editor', is_superuser=False):
        """Create a test user"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@test.com'
        return User.objects.create_user(
            username=username,
            email=email,
            password=password,
            role=role,
            is_superuser=is_superuser,
        )

    @staticmethod
    def create_admin(**kwargs):
        kwargs.setdefault('role', 'admin')
        return TestDataFactory.create_user(**kwargs)

    @staticmethod
    def create_asset(filename=None, mime_type='image/jpeg'):
        """Create an asset row without touching storage"""
        if not filename:
            filename = f'{TestDataFactory.random_string(8)}.jpg'
        return Asset.objects.create(
            url=f'https://cdn.test/assets/{filename}',
            filename=filename,
            mime_type=mime_type,
            size=1024,
        )

    @staticmethod
    def create_catalog(name=None, parent=None, slug=None, **kwargs):
        """Create a catalog. Passing a parent makes it a subcatalog."""
        if not name:
            name = f'Catalog {TestDataFactory.random_string(6)}'
        return Catalog.objects.create(
            name=name,
            slug=slug or TestDataFactory.random_slug('catalog'),
            parent=parent,
            **kwargs
        )

    @staticmethod
    def create_subcatalog(parent=None, **kwargs):
        parent = parent or TestDataFactory.create_catalog()
        return TestDataFactory.create_catalog(parent=parent, **kwargs)

    @staticmethod
    def create_product(name=None, catalog=None, slug=None, base_price=Decimal('100.00'), **kwargs):
        """Create a product directly (no sale sync)"""
        if not name:
            name = f'Product {TestDataFactory.random_string(6)}'
        return Product.objects.create(
            name=name,
            slug=slug or TestDataFactory.random_slug('product'),
            catalog=catalog,
            base_price=base_price,
            **kwargs
        )

    @staticmethod
    def add_product_image(product, asset=None, position=0, is_primary=False):
        asset = asset or TestDataFactory.create_asset()
        return ProductAsset.objects.create(product=product, asset=asset, position=position, is_primary=is_primary)

    @staticmethod
    def create_collection(name=None, slug=None, **kwargs):
        if not name:
            name = f'Collection {TestDataFactory.random_string(6)}'
        return Collection.objects.create(name=name, slug=slug or TestDataFactory.random_slug('collection'), **kwargs)

    @staticmethod
    def create_service(title=None, slug=None, **kwargs):
        if not title:
            title = f'Service {TestDataFactory.random_string(6)}'
        return Service.objects.create(title=title, slug=slug or TestDataFactory.random_slug('service'), **kwargs)

    @staticmethod
    def create_project(title=None, slug=None, **kwargs):
        if not title:
            title = f'Project {TestDataFactory.random_string(6)}'
        return Project.objects.create(title=title, slug=slug or TestDataFactory.random_slug('project'), **kwargs)

    @staticmethod
    def create_post(title=None, slug=None, **kwargs):
        if not title:
            title = f'Post {TestDataFactory.random_string(6)}'
        return Post.objects.create(title=title, slug=slug or TestDataFactory.random_slug('post'), **kwargs)


def use_recording_invalidator(test_case):
    """Install a RecordingInvalidator for the duration of one test"""
    invalidator = RecordingInvalidator()
    set_cache_invalidator(invalidator)
    test_case.addCleanup(set_cache_invalidator, None)
    return invalidator


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
