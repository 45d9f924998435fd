from rest_framework import serializers
from homestore.core.utils import SLUG_PATTERN
from homestore.media.serializers import AssetSerializer
from .models import Catalog, Product, ProductAsset, Collection, ProductImportJob


class CatalogSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Catalog
        fields = ['id', 'name', 'name_vi', 'slug', 'level']


class CollectionSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Collection
        fields = ['id', 'name', 'name_vi', 'slug', 'is_active']


class CatalogSerializer(serializers.ModelSerializer):
    parent_name = serializers.CharField(source='parent.name', read_only=True, default=None)
    image = AssetSerializer(read_only=True)
    product_count = serializers.SerializerMethodField()

    class Meta:
        model = Catalog
        fields = [
            'id', 'name', 'name_vi', 'slug', 'parent', 'parent_name', 'level', 'image',
            'description', 'description_vi', 'show_on_home', 'display_order', 'product_image_ratio',
            'product_count', 'created_at', 'updated_at',
        ]

    def get_product_count(self, obj):
        """Use the annotated count when the list view provides it"""
        if hasattr(obj, 'annotated_product_count'):
            return obj.annotated_product_count
        return obj.products.count()


class CatalogDetailSerializer(CatalogSerializer):
    children = CatalogSummarySerializer(many=True, read_only=True)
    collections = CollectionSummarySerializer(many=True, read_only=True)

    class Meta(CatalogSerializer.Meta):
        fields = CatalogSerializer.Meta.fields + ['children', 'collections']


class CatalogWriteSerializer(serializers.Serializer):
    """Catalog input. ``level`` is not accepted: it follows the parent."""
    name = serializers.CharField(max_length=200)
    name_vi = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)
    slug = serializers.RegexField(SLUG_PATTERN, max_length=200, required=False, allow_blank=True,
                                  error_messages={'invalid': 'Slug must be lowercase and kebab-case.'})
    parent_id = serializers.IntegerField(required=False, allow_null=True)
    image_id = serializers.IntegerField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    description_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    show_on_home = serializers.BooleanField(required=False)
    display_order = serializers.IntegerField(required=False)
    product_image_ratio = serializers.CharField(max_length=10, required=False)
    collection_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False)


class ProductAssetSerializer(serializers.ModelSerializer):
    asset = AssetSerializer(read_only=True)

    class Meta:
        model = ProductAsset
        fields = ['id', 'asset', 'position', 'is_primary', 'focus_point', 'aspect_ratio', 'object_fit']


class ProductListSerializer(serializers.ModelSerializer):
    catalog_name = serializers.CharField(source='catalog.name', read_only=True, default=None)
    primary_image = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'name_vi', 'slug', 'catalog', 'catalog_name', 'base_price', 'discount_price',
            'show_price', 'is_active', 'primary_image', 'created_at', 'updated_at',
        ]

    def get_primary_image(self, obj):
        item = obj.primary_image()
        return item.asset.url if item else None


class ProductSerializer(ProductListSerializer):
    gallery = ProductAssetSerializer(many=True, read_only=True)
    in_sale_section = serializers.SerializerMethodField()

    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + [
            'description', 'description_vi', 'short_description', 'short_description_vi',
            'dimensions', 'gallery', 'in_sale_section',
        ]

    def get_in_sale_section(self, obj):
        return hasattr(obj, 'sale_entry')


class DimensionsSerializer(serializers.Serializer):
    width = serializers.FloatField(min_value=0)
    height = serializers.FloatField(min_value=0)
    depth = serializers.FloatField(min_value=0)
    unit = serializers.CharField(max_length=10)


class FocusPointSerializer(serializers.Serializer):
    x = serializers.FloatField(min_value=0, max_value=100)
    y = serializers.FloatField(min_value=0, max_value=100)


class ProductImageInputSerializer(serializers.Serializer):
    asset_id = serializers.IntegerField(min_value=1)
    is_primary = serializers.BooleanField(required=False, default=False)
    focus_point = FocusPointSerializer(required=False, allow_null=True)
    aspect_ratio = serializers.ChoiceField(choices=ProductAsset.ASPECT_RATIO_CHOICES, required=False)
    object_fit = serializers.ChoiceField(choices=ProductAsset.OBJECT_FIT_CHOICES, required=False)


class ProductWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    name_vi = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    slug = serializers.RegexField(SLUG_PATTERN, max_length=255, required=False, allow_blank=True,
                                  error_messages={'invalid': 'Slug must be lowercase and kebab-case.'})
    catalog_id = serializers.IntegerField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    description_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    short_description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    short_description_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    base_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    discount_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0,
                                              required=False, allow_null=True)
    show_price = serializers.BooleanField(required=False)
    is_active = serializers.BooleanField(required=False)
    dimensions = DimensionsSerializer(required=False, allow_null=True)
    images = ProductImageInputSerializer(many=True, required=False)

    def validate_dimensions(self, value):
        return dict(value) if value is not None else None


class RecommendedProductsSerializer(serializers.Serializer):
    product_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=True)


class CollectionSerializer(serializers.ModelSerializer):
    banner = AssetSerializer(read_only=True)
    product_count = serializers.SerializerMethodField()

    class Meta:
        model = Collection
        fields = [
            'id', 'name', 'name_vi', 'slug', 'description', 'description_vi', 'banner',
            'is_active', 'product_count', 'created_at', 'updated_at',
        ]

    def get_product_count(self, obj):
        return obj.products.count()


class CollectionDetailSerializer(CollectionSerializer):
    products = ProductListSerializer(many=True, read_only=True)
    catalogs = CatalogSummarySerializer(many=True, read_only=True)

    class Meta(CollectionSerializer.Meta):
        fields = CollectionSerializer.Meta.fields + ['products', 'catalogs']


class CollectionWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    name_vi = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)
    slug = serializers.RegexField(SLUG_PATTERN, max_length=200, required=False, allow_blank=True,
                                  error_messages={'invalid': 'Slug must be lowercase and kebab-case.'})
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    description_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    banner_id = serializers.IntegerField(required=False, allow_null=True)
    is_active = serializers.BooleanField(required=False)
    product_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False)
    catalog_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False)


class ProductImportUploadSerializer(serializers.Serializer):
    file = serializers.FileField()


class ProductImportJobSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductImportJob
        fields = [
            'id', 'status', 'total_rows', 'processed_rows', 'success_count', 'error_count',
            'errors', 'created_at', 'completed_at',
        ]
