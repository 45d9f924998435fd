from rest_framework import serializers
from .models import Asset
from .overlay import POSITION_CHOICES


class AssetSerializer(serializers.ModelSerializer):
    class Meta:
        model = Asset
        fields = ['id', 'url', 'filename', 'mime_type', 'size', 'alt_text', 'created_at']
        read_only_fields = ['url', 'filename', 'mime_type', 'size', 'created_at']


class AssetUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    folder = serializers.CharField(required=False, allow_blank=True, max_length=100)
    alt_text = serializers.CharField(required=False, allow_blank=True, max_length=255)
    apply_overlay = serializers.BooleanField(required=False, default=False)


class ProcessOverlaySerializer(serializers.Serializer):
    asset_id = serializers.IntegerField()


class LogoOverlaySettingsSerializer(serializers.Serializer):
    enabled = serializers.BooleanField(required=False)
    logo_asset_id = serializers.IntegerField(required=False, allow_null=True)
    position = serializers.ChoiceField(choices=POSITION_CHOICES, required=False)
    size_percent = serializers.IntegerField(required=False, min_value=5, max_value=50)
    opacity = serializers.IntegerField(required=False, min_value=0, max_value=100)
    padding = serializers.IntegerField(required=False, min_value=0, max_value=200)

    def validate_logo_asset_id(self, value):
        if value is not None and not Asset.objects.filter(pk=value).exists():
            raise serializers.ValidationError('Logo asset not found.')
        return value
