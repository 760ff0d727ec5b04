from rest_framework import serializers

from core.serializers import TenantScopedSerializerMixin

from .models import Appointment


class AppointmentSerializer(TenantScopedSerializerMixin, serializers.ModelSerializer):
    tenant_scoped_fields = ('patient', 'doctor')

    doctor_name = serializers.CharField(source='doctor.full_name', read_only=True)
    patient_code = serializers.CharField(source='patient.code', read_only=True)

    class Meta:
        model = Appointment
        fields = [
            'id', 'branch', 'patient', 'patient_code', 'doctor', 'doctor_name',
            'title', 'phone', 'type', 'start', 'end', 'chair', 'status', 'notes',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'branch', 'created_at', 'updated_at']

    def validate(self, data):
        """Validate appointment timing"""
        start = data.get('start', getattr(self.instance, 'start', None))
        end = data.get('end', getattr(self.instance, 'end', None))

        if start and end and end <= start:
            raise serializers.ValidationError({'end': 'End time must be after start time.'})

        patient = data.get('patient')
        if patient is not None and self.instance is None:
            data.setdefault('title', patient.full_name)
            data.setdefault('phone', patient.mobile)

        return data
