"""
Serializers for admin API endpoints.
"""

from rest_framework import serializers


class CreateActivationCodeRequestSerializer(serializers.Serializer):
    """Serializer for create activation code request."""

    phone = serializers.CharField(required=True, allow_blank=False, max_length=32)
    order_id = serializers.CharField(required=False, allow_blank=True, max_length=100)
    customer_name = serializers.CharField(required=False, allow_blank=True, max_length=200)
    customer_email = serializers.EmailField(required=False, allow_blank=True)


class LicenseRecordDTOSerializer(serializers.Serializer):
    """Serializer for LicenseRecordDTO."""

    id = serializers.UUIDField()
    phone = serializers.CharField()
    order_id = serializers.CharField()
    customer_name = serializers.CharField(allow_null=True)
    customer_email = serializers.EmailField(allow_null=True)
    used = serializers.BooleanField()
    used_at = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()


class CreateActivationCodeResponseSerializer(serializers.Serializer):
    """Serializer for create activation code response."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    created = serializers.BooleanField()
    data = LicenseRecordDTOSerializer()
