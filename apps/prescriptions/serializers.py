# apps/prescriptions/serializers.py
from rest_framework import serializers

from core.serializers import TenantScopedSerializerMixin

from .models import Drug, Prescription


class DrugSerializer(serializers.ModelSerializer):
    class Meta:
        model = Drug
        fields = [
            'id', 'name', 'type', 'generic_name',
            'default_dosage', 'default_duration', 'instruction',
        ]


class MedicationSerializer(serializers.Serializer):
    """One line of a prescription, stored inline."""
    drug_name = serializers.CharField(max_length=200)
    dosage = serializers.CharField(max_length=50)
    duration = serializers.CharField(max_length=50)
    instruction = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    type = serializers.CharField(max_length=50, required=False, default='Tablet')


class PrescriptionSerializer(TenantScopedSerializerMixin, serializers.ModelSerializer):
    tenant_scoped_fields = ('patient', 'doctor', 'appointment')

    medications = MedicationSerializer(many=True, allow_empty=False)
    doctor_name = serializers.CharField(source='doctor.full_name', read_only=True)
    total_medicines = serializers.IntegerField(read_only=True)

    class Meta:
        model = Prescription
        fields = [
            'id', 'branch', 'patient', 'doctor', 'doctor_name', 'appointment',
            'medications', 'total_medicines', 'notes', 'date', 'created_at',
        ]
        read_only_fields = ['id', 'branch', 'date', 'created_at']
        extra_kwargs = {'doctor': {'required': False}}

    def validate_medications(self, value):
        return [dict(item) for item in value]

    def validate(self, attrs):
        appointment = attrs.get('appointment')
        patient = attrs.get('patient', getattr(self.instance, 'patient', None))
        if appointment is not None and patient is not None and appointment.patient_id != patient.pk:
            raise serializers.ValidationError({'appointment': 'Appointment belongs to another patient.'})
        return attrs

    def create(self, validated_data):
        return Prescription.objects.create(**validated_data)
