# apps/settings_core/serializers.py

from rest_framework import serializers

from core.constants import PermissionKey, Role


class PermissionMapSerializer(serializers.Serializer):
    """
    {"Doctor": ["fin_view_revenue", ...], ...}
    Unknown roles or permission keys are rejected.
    """

    def to_internal_value(self, data):
        if not isinstance(data, dict):
            raise serializers.ValidationError("Expected an object mapping roles to permission lists.")

        errors = {}
        result = {}
        for role, keys in data.items():
            if role not in Role.values:
                errors[role] = "Unknown role."
                continue
            if not isinstance(keys, list):
                errors[role] = "Expected a list of permission keys."
                continue
            unknown = [key for key in keys if key not in PermissionKey.values]
            if unknown:
                errors[role] = f"Unknown permission keys: {', '.join(map(str, unknown))}"
                continue
            result[role] = keys

        if errors:
            raise serializers.ValidationError(errors)
        return result

    def to_representation(self, instance):
        return instance
