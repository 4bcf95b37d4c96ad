"""
Serializers for activation API endpoints.

Field names follow the JSON contract the mobile client already speaks
(camelCase), hence the explicit ``source`` mappings.
"""

from rest_framework import serializers

from core.domain.value_objects import DEVICE_ID_MAX_LENGTH


class ActivateRequestSerializer(serializers.Serializer):
    """Serializer for activate request."""

    phone = serializers.CharField(required=True, max_length=64)
    deviceId = serializers.CharField(required=True, max_length=DEVICE_ID_MAX_LENGTH)


class ActivationStatusQuerySerializer(serializers.Serializer):
    """Serializer for status-by-phone query parameters."""

    phone = serializers.CharField(required=True, max_length=64)
    deviceId = serializers.CharField(
        required=False, allow_blank=True, max_length=DEVICE_ID_MAX_LENGTH
    )


class DeviceActivationQuerySerializer(serializers.Serializer):
    """Serializer for status-by-device query parameters."""

    fingerprint = serializers.CharField(required=True, max_length=DEVICE_ID_MAX_LENGTH)


class ProfileSerializer(serializers.Serializer):
    """Serializer for UserProfile."""

    phone = serializers.CharField()
    name = serializers.CharField(allow_null=True)
    firstName = serializers.CharField(source="first_name", allow_null=True)
    email = serializers.CharField(allow_null=True)


class ActivationDataSerializer(serializers.Serializer):
    """Serializer for ActivationResultDTO."""

    phone = serializers.CharField()
    deviceId = serializers.CharField(source="device_id")
    activatedAt = serializers.DateTimeField(source="activated_at")
    profile = ProfileSerializer()


class ActivateResponseSerializer(serializers.Serializer):
    """Serializer for activate response (schema only)."""

    success = serializers.BooleanField()
    message = serializers.CharField(required=False)
    data = ActivationDataSerializer(required=False)


class ActivationStatusResponseSerializer(serializers.Serializer):
    """Serializer for status-by-phone response (schema only)."""

    valid = serializers.BooleanField()
    error = serializers.CharField(required=False)
    code = serializers.CharField(required=False)
    profile = ProfileSerializer(required=False)


class DeviceActivationResponseSerializer(serializers.Serializer):
    """Serializer for DeviceActivationDTO."""

    activated = serializers.BooleanField()
    phone = serializers.CharField(required=False)
    profile = ProfileSerializer(required=False)

    def to_representation(self, instance):
        """Omit phone and profile for devices with no license."""
        data = super().to_representation(instance)
        if not data.get("activated"):
            return {"activated": False}
        return data
