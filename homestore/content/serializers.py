from rest_framework import serializers
from homestore.core.utils import SLUG_PATTERN
from homestore.media.serializers import AssetSerializer
from .models import Service, ServiceAsset, Project, ProjectAsset, Post, PostAsset

SEO_FIELDS = [
    'seo_title', 'seo_title_vi', 'seo_description', 'seo_description_vi', 'seo_keywords', 'seo_keywords_vi',
]


class ServiceAssetSerializer(serializers.ModelSerializer):
    asset = AssetSerializer(read_only=True)

    class Meta:
        model = ServiceAsset
        fields = ['id', 'asset', 'position', 'is_primary']


class ProjectAssetSerializer(serializers.ModelSerializer):
    asset = AssetSerializer(read_only=True)

    class Meta:
        model = ProjectAsset
        fields = ['id', 'asset', 'position', 'is_primary']


class PostAssetSerializer(serializers.ModelSerializer):
    asset = AssetSerializer(read_only=True)

    class Meta:
        model = PostAsset
        fields = ['id', 'asset', 'position', 'is_primary']


class ServiceSerializer(serializers.ModelSerializer):
    image = AssetSerializer(read_only=True)
    gallery = ServiceAssetSerializer(many=True, read_only=True)

    class Meta:
        model = Service
        fields = [
            'id', 'title', 'title_vi', 'slug', 'description_html', 'description_html_vi', 'image',
            'is_active', 'gallery', 'created_at', 'updated_at',
        ] + SEO_FIELDS


class ProjectSerializer(serializers.ModelSerializer):
    image = AssetSerializer(read_only=True)
    gallery = ProjectAssetSerializer(many=True, read_only=True)

    class Meta:
        model = Project
        fields = [
            'id', 'title', 'title_vi', 'slug', 'content_html', 'content_html_vi', 'image',
            'is_active', 'gallery', 'created_at', 'updated_at',
        ] + SEO_FIELDS


class PostSerializer(serializers.ModelSerializer):
    featured_image = AssetSerializer(read_only=True)
    gallery = PostAssetSerializer(many=True, read_only=True)

    class Meta:
        model = Post
        fields = [
            'id', 'title', 'title_vi', 'slug', 'excerpt', 'excerpt_vi', 'content_html', 'content_html_vi',
            'featured_image', 'is_active', 'gallery', 'created_at', 'updated_at',
        ] + SEO_FIELDS


class ContentSummarySerializer(serializers.Serializer):
    """Row shape for admin list pages"""
    id = serializers.IntegerField()
    title = serializers.CharField()
    title_vi = serializers.CharField(allow_null=True)
    slug = serializers.CharField()
    is_active = serializers.BooleanField()
    image_url = serializers.SerializerMethodField()
    updated_at = serializers.DateTimeField()

    def get_image_url(self, obj):
        image = getattr(obj, 'featured_image', None) if isinstance(obj, Post) else obj.image
        return image.url if image else None


class GalleryImageInputSerializer(serializers.Serializer):
    asset_id = serializers.IntegerField(min_value=1)
    is_primary = serializers.BooleanField(required=False, default=False)


class ContentWriteSerializer(serializers.Serializer):
    """Fields common to services, projects and posts"""
    title = serializers.CharField(max_length=255)
    title_vi = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    slug = serializers.RegexField(SLUG_PATTERN, max_length=255, required=False, allow_blank=True,
                                  error_messages={'invalid': 'Slug must be lowercase and kebab-case.'})
    is_active = serializers.BooleanField(required=False)
    seo_title = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    seo_title_vi = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    seo_description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    seo_description_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    seo_keywords = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    seo_keywords_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    images = GalleryImageInputSerializer(many=True, required=False)


class ServiceWriteSerializer(ContentWriteSerializer):
    description_html = serializers.CharField(required=False, allow_blank=True)
    description_html_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ProjectWriteSerializer(ContentWriteSerializer):
    content_html = serializers.CharField(required=False, allow_blank=True)
    content_html_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class PostWriteSerializer(ContentWriteSerializer):
    excerpt = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    excerpt_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    content_html = serializers.CharField(required=False, allow_blank=True)
    content_html_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
