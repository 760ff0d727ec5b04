from rest_framework import serializers

from apps.clinics.models import Clinic


    # =========================
    #✅ Clinic profile
    # =========================

class ClinicSerializer(serializers.ModelSerializer):
    class Meta:
        model = Clinic
        fields = [
            "id",
            "code",
            "name",
            "legal_name",
            "registration_number",
            "gstin",
            "phone",
            "email",
            "website",
            "address",
            "city",
            "state",
            "zip_code",
            "logo",
            "primary_color",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "code", "created_at", "updated_at"]
