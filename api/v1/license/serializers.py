"""
Serializers for license API endpoints.
"""

from rest_framework import serializers


class ActivateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for activate license request."""

    activation_key = serializers.CharField(required=True, max_length=1000, trim_whitespace=True)


class EntitlementDTOSerializer(serializers.Serializer):
    """Serializer for EntitlementDTO."""

    id = serializers.CharField()
    product_id = serializers.CharField()
    is_main_plan = serializers.BooleanField()
    features = serializers.DictField()
    valid_from = serializers.DateTimeField(allow_null=True)
    valid_to = serializers.DateTimeField(allow_null=True)


class LicenseInfoResponseSerializer(serializers.Serializer):
    """Serializer for license information response."""

    state = serializers.CharField()
    plan_name = serializers.CharField()
    info = serializers.CharField()
    users_limit = serializers.IntegerField()
    is_within_users_limit = serializers.BooleanField()
    entitlements = EntitlementDTOSerializer(many=True)
