"""
Serializers for the command endpoint.

Payload field names follow the wire format (camelCase).
"""

from django.conf import settings
from rest_framework import serializers


class CommandRequestSerializer(serializers.Serializer):
    """Serializer for the ``{action, payload}`` request envelope."""

    action = serializers.CharField(trim_whitespace=False, max_length=64)
    payload = serializers.DictField(required=False, default=dict)


class AppPayloadSerializer(serializers.Serializer):
    """Payload of commands scoped to one application."""

    appId = serializers.CharField(trim_whitespace=False, max_length=100)


class IssueKeyPayloadSerializer(AppPayloadSerializer):
    """Payload of the single key issuance command."""

    duration = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    def validate_duration(self, value):
        """Validate duration against the configured maximum."""
        if value is not None and value > settings.KEY_MAX_DURATION_DAYS:
            raise serializers.ValidationError(
                f"Duration cannot exceed {settings.KEY_MAX_DURATION_DAYS} days"
            )
        return value


class IssueBulkKeysPayloadSerializer(IssueKeyPayloadSerializer):
    """Payload of the bulk key issuance command."""

    quantity = serializers.IntegerField(min_value=1)

    def validate_quantity(self, value):
        """Validate quantity against the configured maximum."""
        if value > settings.KEY_BULK_MAX_QUANTITY:
            raise serializers.ValidationError(
                f"Quantity cannot exceed {settings.KEY_BULK_MAX_QUANTITY}"
            )
        return value


class KeyPayloadSerializer(serializers.Serializer):
    """Payload of commands addressing one key."""

    key = serializers.CharField(trim_whitespace=False, max_length=100)


class BotAccessPayloadSerializer(serializers.Serializer):
    """Payload of the enable/disable commands."""

    targetId = serializers.CharField(trim_whitespace=False, max_length=100)


class KeySerializer(serializers.Serializer):
    """Serializer for KeyDTO."""

    key = serializers.CharField()
    appId = serializers.CharField(source="app_id")
    status = serializers.CharField()
    createdAt = serializers.DateTimeField(source="created_at")
    expiresAt = serializers.DateTimeField(source="expires_at", allow_null=True)
    userDiscordId = serializers.CharField(source="user_discord_id", allow_null=True)


class KeyStatsSerializer(serializers.Serializer):
    """Serializer for KeyStatsDTO."""

    totalKeys = serializers.IntegerField(source="total_keys")
    unusedKeys = serializers.IntegerField(source="unused_keys")
    usedKeys = serializers.IntegerField(source="used_keys")


class CommandResponseSerializer(serializers.Serializer):
    """Envelope returned by every command (schema documentation only)."""

    success = serializers.BooleanField()
    message = serializers.CharField(required=False)
    keys = serializers.ListField(required=False)
    keyData = KeySerializer(required=False)
    stats = KeyStatsSerializer(required=False)
    deletedCount = serializers.IntegerField(required=False)
