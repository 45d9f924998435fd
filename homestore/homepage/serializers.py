from rest_framework import serializers
from homestore.catalog.serializers import CatalogSummarySerializer, ProductListSerializer
from homestore.media.serializers import AssetSerializer
from .models import (
    SiteHero, SiteIntro, SiteFooter, FooterAddress, FooterContact, FooterSocialLink, SiteContact,
    FeaturedCatalogRow, FeaturedCatalogRowItem, SaleSectionSettings, HomepageSaleProduct, NavMenuItem,
)


# Read serializers

class SiteHeroSerializer(serializers.ModelSerializer):
    background_image = AssetSerializer(read_only=True)
    background_video = AssetSerializer(read_only=True)

    class Meta:
        model = SiteHero
        fields = [
            'id', 'title', 'title_vi', 'subtitle', 'subtitle_vi', 'button_text', 'button_text_vi', 'button_link',
            'background_type', 'background_image', 'background_video', 'is_active', 'updated_at',
        ]


class SiteIntroSerializer(serializers.ModelSerializer):
    intro_image = AssetSerializer(read_only=True)
    background_image = AssetSerializer(read_only=True)

    class Meta:
        model = SiteIntro
        fields = [
            'id', 'title', 'title_vi', 'subtitle', 'subtitle_vi', 'content_html', 'content_html_vi',
            'intro_image', 'background_image', 'is_active', 'updated_at',
        ]


class SiteFooterSerializer(serializers.ModelSerializer):
    class Meta:
        model = SiteFooter
        fields = ['id', 'intro', 'intro_vi', 'description', 'description_vi', 'map_embed_url', 'updated_at']


class FooterAddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = FooterAddress
        fields = ['id', 'label', 'label_vi', 'address', 'address_vi', 'position']


class FooterContactSerializer(serializers.ModelSerializer):
    class Meta:
        model = FooterContact
        fields = ['id', 'type', 'label', 'label_vi', 'value', 'position']


class FooterSocialLinkSerializer(serializers.ModelSerializer):
    class Meta:
        model = FooterSocialLink
        fields = ['id', 'platform', 'url', 'is_active', 'position']


class FooterBundleSerializer(serializers.Serializer):
    footer = SiteFooterSerializer(allow_null=True)
    addresses = FooterAddressSerializer(many=True)
    contacts = FooterContactSerializer(many=True)
    social_links = FooterSocialLinkSerializer(many=True)


class SiteContactSerializer(serializers.ModelSerializer):
    class Meta:
        model = SiteContact
        fields = ['id', 'type', 'label', 'value', 'is_active', 'position']


class NavMenuItemSerializer(serializers.ModelSerializer):
    catalog = CatalogSummarySerializer(read_only=True)
    service = serializers.SerializerMethodField()

    class Meta:
        model = NavMenuItem
        fields = ['id', 'item_type', 'catalog', 'service', 'position', 'is_active']

    def get_service(self, obj):
        if obj.service is None:
            return None
        return {'id': obj.service.pk, 'title': obj.service.title, 'slug': obj.service.slug}


class FeaturedCatalogRowItemSerializer(serializers.ModelSerializer):
    catalog = CatalogSummarySerializer(read_only=True)
    image_url = serializers.SerializerMethodField()

    class Meta:
        model = FeaturedCatalogRowItem
        fields = ['id', 'catalog', 'image_url', 'position']

    def get_image_url(self, obj):
        return obj.catalog.image.url if obj.catalog.image_id else None


class FeaturedCatalogRowSerializer(serializers.ModelSerializer):
    items = FeaturedCatalogRowItemSerializer(many=True, read_only=True)

    class Meta:
        model = FeaturedCatalogRow
        fields = ['id', 'position', 'columns', 'items']


class SaleSectionSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = SaleSectionSettings
        fields = ['id', 'title', 'title_vi', 'is_active', 'updated_at']


class HomepageSaleProductSerializer(serializers.ModelSerializer):
    product = ProductListSerializer(read_only=True)

    class Meta:
        model = HomepageSaleProduct
        fields = ['id', 'product', 'position']


# Write serializers

class HeroWriteSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    title_vi = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    subtitle = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    subtitle_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    button_text = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    button_text_vi = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    button_link = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    background_type = serializers.ChoiceField(choices=SiteHero.BACKGROUND_TYPE_CHOICES)
    background_image_id = serializers.IntegerField(required=False, allow_null=True)
    background_video_id = serializers.IntegerField(required=False, allow_null=True)
    is_active = serializers.BooleanField(required=False)


class IntroWriteSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    title_vi = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    subtitle = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    subtitle_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    content_html = serializers.CharField(required=False, allow_blank=True)
    content_html_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    intro_image_id = serializers.IntegerField(required=False, allow_null=True)
    background_image_id = serializers.IntegerField(required=False, allow_null=True)
    is_active = serializers.BooleanField(required=False)


class FooterAddressInputSerializer(serializers.Serializer):
    label = serializers.CharField(max_length=255)
    label_vi = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    address = serializers.CharField()
    address_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class FooterContactInputSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=FooterContact.TYPE_CHOICES)
    label = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    label_vi = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    value = serializers.CharField(max_length=255)


class FooterSocialLinkInputSerializer(serializers.Serializer):
    platform = serializers.ChoiceField(choices=FooterSocialLink.PLATFORM_CHOICES)
    url = serializers.URLField(max_length=500)
    is_active = serializers.BooleanField(required=False, default=True)


class FooterWriteSerializer(serializers.Serializer):
    intro = serializers.CharField(required=False, allow_blank=True)
    intro_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    description_vi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    map_embed_url = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    addresses = FooterAddressInputSerializer(many=True, required=False)
    contacts = FooterContactInputSerializer(many=True, required=False)
    social_links = FooterSocialLinkInputSerializer(many=True, required=False)


class SiteContactInputSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=SiteContact.TYPE_CHOICES)
    label = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    value = serializers.CharField(max_length=500, required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False, default=True)


class SiteContactsWriteSerializer(serializers.Serializer):
    contacts = SiteContactInputSerializer(many=True)


class NavMenuItemInputSerializer(serializers.Serializer):
    item_type = serializers.ChoiceField(choices=NavMenuItem.ITEM_TYPE_CHOICES)
    catalog_id = serializers.IntegerField(required=False, allow_null=True)
    service_id = serializers.IntegerField(required=False, allow_null=True)
    is_active = serializers.BooleanField(required=False, default=True)


class NavMenuWriteSerializer(serializers.Serializer):
    items = NavMenuItemInputSerializer(many=True)


class FeaturedRowInputSerializer(serializers.Serializer):
    columns = serializers.IntegerField(min_value=1, max_value=4)
    catalog_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=True)

    def validate(self, attrs):
        if len(attrs['catalog_ids']) > attrs['columns']:
            raise serializers.ValidationError({'catalog_ids': 'A row cannot hold more catalogs than columns.'})
        return attrs


class FeaturedLayoutWriteSerializer(serializers.Serializer):
    rows = FeaturedRowInputSerializer(many=True)


class SaleSettingsWriteSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255, required=False)
    title_vi = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    is_active = serializers.BooleanField(required=False)


class SaleProductInputSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)


class SaleReorderSerializer(serializers.Serializer):
    product_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=True)
