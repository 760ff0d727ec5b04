from rest_framework import serializers

from apps.clinics.models import Branch


    # =========================
    #✅ BranchSerializer
    # =========================

class BranchSerializer(serializers.ModelSerializer):
    class Meta:
        model = Branch
        fields = [
            "id",
            "clinic",
            "code",
            "name",
            "address",
            "phone",
            "chair_count",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "clinic", "code", "created_at", "updated_at"]

    def validate_chair_count(self, value):
        if value < 1:
            raise serializers.ValidationError("A branch needs at least one chair.")
        return value
