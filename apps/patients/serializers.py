# apps/patients/serializers.py

from rest_framework import serializers

from core.serializers import TenantScopedSerializerMixin

from .models import ClinicalNote, Patient, TreatmentItem


def _validate_string_list(value, label):
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise serializers.ValidationError(f"{label} must be a list of strings.")
    return value


# -----------------------------
# Treatment plan
# -----------------------------
class TreatmentItemSerializer(TenantScopedSerializerMixin, serializers.ModelSerializer):
    tenant_scoped_fields = ('doctor',)

    class Meta:
        model = TreatmentItem
        fields = ['id', 'tooth', 'procedure', 'cost', 'status', 'doctor', 'date', 'is_billed']
        read_only_fields = ['id', 'date', 'is_billed']


class TreatmentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TreatmentItem._meta.get_field('status').choices)


class CompleteTreatmentsSerializer(serializers.Serializer):
    item_ids = serializers.ListField(child=serializers.IntegerField(), required=False)


# -----------------------------
# Patient
# -----------------------------
class PatientSerializer(TenantScopedSerializerMixin, serializers.ModelSerializer):
    tenant_scoped_fields = ('assigned_doctor',)

    wallet_balance = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    assigned_doctor_name = serializers.CharField(source='assigned_doctor.full_name', read_only=True, default=None)
    treatment_items = TreatmentItemSerializer(many=True, read_only=True)

    class Meta:
        model = Patient
        fields = [
            'id', 'clinic', 'branch', 'code',
            'full_name', 'mobile', 'email', 'age', 'gender', 'blood_group', 'address',
            'emergency_contact', 'emergency_relation',
            'assigned_doctor', 'assigned_doctor_name', 'referred_by', 'communication',
            'primary_concern', 'pain_level', 'medical_conditions', 'allergies', 'notes',
            'photo', 'xrays', 'last_visit', 'is_active',
            'total_cost', 'total_paid', 'wallet_balance',
            'treatment_items',
            'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'clinic', 'branch', 'code', 'last_visit', 'is_active',
            'total_cost', 'total_paid', 'created_at', 'updated_at',
        ]

    def validate_medical_conditions(self, value):
        return _validate_string_list(value, "Medical conditions")

    def validate_xrays(self, value):
        return _validate_string_list(value, "X-rays")


class PatientListSerializer(PatientSerializer):
    class Meta(PatientSerializer.Meta):
        fields = [
            'id', 'code', 'full_name', 'mobile', 'gender', 'age',
            'assigned_doctor', 'assigned_doctor_name', 'last_visit',
            'total_cost', 'total_paid', 'wallet_balance', 'created_at',
        ]


class MedicalAlertsSerializer(serializers.Serializer):
    medical_conditions = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    allergies = serializers.CharField(required=False, allow_blank=True, default='')


# -----------------------------
# Clinical notes
# -----------------------------
class ClinicalNoteSerializer(TenantScopedSerializerMixin, serializers.ModelSerializer):
    tenant_scoped_fields = ('patient',)

    class Meta:
        model = ClinicalNote
        fields = [
            'id', 'branch', 'patient', 'doctor', 'doctor_name',
            'visit_date', 'type', 'content', 'tags',
            'created_at',
        ]
        read_only_fields = ['id', 'branch', 'doctor', 'doctor_name', 'created_at']

    def validate_tags(self, value):
        return _validate_string_list(value, "Tags")
