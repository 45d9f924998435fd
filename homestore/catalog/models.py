from django.conf import settings
from django.db import models


class Catalog(models.Model):
    """Two-level product category. Level is 2 when a parent is set, 1 otherwise."""
    LEVEL_CHOICES = [
        (1, 'Catalog'),
        (2, 'Subcatalog'),
    ]

    name = models.CharField(max_length=200)
    name_vi = models.CharField(max_length=200, blank=True, null=True)
    slug = models.SlugField(max_length=200, unique=True)
    parent = models.ForeignKey('self', on_delete=models.CASCADE, null=True, blank=True, related_name='children')
    level = models.PositiveSmallIntegerField(choices=LEVEL_CHOICES, default=1)
    image = models.ForeignKey('media.Asset', on_delete=models.SET_NULL, null=True, blank=True, related_name='catalogs')
    description = models.TextField(blank=True, null=True)
    description_vi = models.TextField(blank=True, null=True)
    show_on_home = models.BooleanField(default=False)
    display_order = models.IntegerField(default=0)
    product_image_ratio = models.CharField(max_length=10, default='4:5')
    collections = models.ManyToManyField('Collection', through='CatalogCollection', related_name='catalogs', blank=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        if self.parent_id:
            return f"{self.parent.name} / {self.name}"
        return self.name

    def save(self, *args, **kwargs):
        self.level = 2 if self.parent_id else 1
        super().save(*args, **kwargs)

    class Meta:
        db_table = 'catalogs'
        ordering = ['display_order', 'name']


class Product(models.Model):
    """Sellable product, attached to at most one level-2 catalog"""
    name = models.CharField(max_length=255, db_index=True)
    name_vi = models.CharField(max_length=255, blank=True, null=True)
    slug = models.SlugField(max_length=255, unique=True)
    catalog = models.ForeignKey(Catalog, on_delete=models.SET_NULL, null=True, blank=True, related_name='products')
    description = models.TextField(blank=True, null=True)
    description_vi = models.TextField(blank=True, null=True)
    short_description = models.TextField(blank=True, null=True)
    short_description_vi = models.TextField(blank=True, null=True)
    base_price = models.DecimalField(max_digits=10, decimal_places=2)
    discount_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    show_price = models.BooleanField(default=True)
    is_active = models.BooleanField(default=True, db_index=True)
    dimensions = models.JSONField(null=True, blank=True)  # {width, height, depth, unit}
    assets = models.ManyToManyField('media.Asset', through='ProductAsset', related_name='products', blank=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    @property
    def is_on_sale(self):
        return self.discount_price is not None

    def primary_image(self):
        """Primary gallery row, falling back to the first by position"""
        gallery = sorted(self.gallery.all(), key=lambda item: item.position)
        for item in gallery:
            if item.is_primary:
                return item
        return gallery[0] if gallery else None

    class Meta:
        db_table = 'products'


class ProductAsset(models.Model):
    """Product gallery image with display settings"""
    ASPECT_RATIO_CHOICES = [
        ('original', 'Original'),
        ('1:1', '1:1'),
        ('3:4', '3:4'),
        ('4:3', '4:3'),
        ('16:9', '16:9'),
        ('4:5', '4:5'),
    ]
    OBJECT_FIT_CHOICES = [
        ('cover', 'Cover'),
        ('contain', 'Contain'),
    ]

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='gallery')
    asset = models.ForeignKey('media.Asset', on_delete=models.CASCADE, related_name='product_gallery')
    position = models.IntegerField(default=0)
    is_primary = models.BooleanField(default=False)
    focus_point = models.JSONField(null=True, blank=True)  # {x: 0-100, y: 0-100}
    aspect_ratio = models.CharField(max_length=10, choices=ASPECT_RATIO_CHOICES, default='original')
    object_fit = models.CharField(max_length=10, choices=OBJECT_FIT_CHOICES, default='cover')

    class Meta:
        db_table = 'product_assets'
        ordering = ['position']
        unique_together = [['product', 'asset']]


class Collection(models.Model):
    """Curated cross-catalog product grouping"""
    name = models.CharField(max_length=200)
    name_vi = models.CharField(max_length=200, blank=True, null=True)
    slug = models.SlugField(max_length=200, unique=True)
    description = models.TextField(blank=True, null=True)
    description_vi = models.TextField(blank=True, null=True)
    banner = models.ForeignKey('media.Asset', on_delete=models.PROTECT, null=True, blank=True, related_name='collection_banners')
    is_active = models.BooleanField(default=True)
    products = models.ManyToManyField(Product, through='CollectionProduct', related_name='collections', blank=True)
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'collections'


class CollectionProduct(models.Model):
    collection = models.ForeignKey(Collection, on_delete=models.CASCADE, related_name='product_links')
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='collection_links')

    class Meta:
        db_table = 'collection_products'
        unique_together = [['collection', 'product']]


class CatalogCollection(models.Model):
    catalog = models.ForeignKey(Catalog, on_delete=models.CASCADE, related_name='collection_links')
    collection = models.ForeignKey(Collection, on_delete=models.CASCADE, related_name='catalog_links')

    class Meta:
        db_table = 'catalog_collections'
        unique_together = [['catalog', 'collection']]


class RecommendedProduct(models.Model):
    """Ordered "you may also like" list for a product"""
    source_product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='recommendations')
    recommended_product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='recommended_in')
    position = models.IntegerField(default=0)

    class Meta:
        db_table = 'recommended_products'
        ordering = ['position']
        unique_together = [['source_product', 'recommended_product']]


class ProductImportJob(models.Model):
    """CSV product import progress and row errors"""
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('processing', 'Processing'),
        ('completed', 'Completed'),
        ('failed', 'Failed'),
    ]

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    total_rows = models.IntegerField(default=0)
    processed_rows = models.IntegerField(default=0)
    success_count = models.IntegerField(default=0)
    error_count = models.IntegerField(default=0)
    errors = models.JSONField(default=list, blank=True)  # [{row, field, message}]
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='product_import_jobs')
    created_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return f"Import #{self.pk} ({self.status})"

    class Meta:
        db_table = 'product_import_jobs'
        ordering = ['-created_at']
