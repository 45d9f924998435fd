import re

from rest_framework import serializers

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_PATTERN = re.compile(r'^[0-9+\s-]{8,15}$')


class ContactFormSerializer(serializers.Serializer):
    """Storefront "contact us" form"""
    name = serializers.CharField(min_length=2, max_length=200,
                                 error_messages={'min_length': 'Name must be at least 2 characters.'})
    phone_country = serializers.CharField(max_length=6, required=False, default='+84')
    phone_number = serializers.CharField(max_length=30)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    content = serializers.CharField(min_length=10,
                                    error_messages={'min_length': 'Content must be at least 10 characters.'})

    def validate_phone_number(self, value):
        value = value.strip()
        if sum(ch.isdigit() for ch in value) < 8:
            raise serializers.ValidationError('Invalid phone number.')
        return value

    def validate(self, attrs):
        # Leading zeros are dropped so +84 and 0901... become +84901...
        attrs['full_phone'] = f"{attrs.get('phone_country') or ''}{attrs['phone_number'].lstrip('0')}"
        return attrs


class SubscribeSerializer(serializers.Serializer):
    """Footer subscribe box: an email address or a phone number"""
    contact = serializers.CharField(max_length=255)

    def validate_contact(self, value):
        value = value.strip()
        if not EMAIL_PATTERN.match(value) and not PHONE_PATTERN.match(value):
            raise serializers.ValidationError('Please enter a valid email or phone number.')
        return value

