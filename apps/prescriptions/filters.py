import django_filters

from .models import Prescription


class PrescriptionFilter(django_filters.FilterSet):
    patient = django_filters.NumberFilter(field_name='patient_id')
    doctor = django_filters.NumberFilter(field_name='doctor_id')
    appointment = django_filters.NumberFilter(field_name='appointment_id')
    date_from = django_filters.DateFilter(field_name='date', lookup_expr='date__gte')
    date_to = django_filters.DateFilter(field_name='date', lookup_expr='date__lte')

    class Meta:
        model = Prescription
        fields = ['patient', 'doctor', 'appointment']
