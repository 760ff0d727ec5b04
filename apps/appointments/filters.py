import django_filters

from .models import Appointment


class AppointmentFilter(django_filters.FilterSet):
    # Plain id filters: an id outside the tenant simply matches nothing
    patient = django_filters.NumberFilter(field_name='patient_id')
    doctor = django_filters.NumberFilter(field_name='doctor_id')
    date = django_filters.DateFilter(field_name='start', lookup_expr='date')
    date_from = django_filters.DateFilter(field_name='start', lookup_expr='date__gte')
    date_to = django_filters.DateFilter(field_name='start', lookup_expr='date__lte')

    class Meta:
        model = Appointment
        fields = ['patient', 'doctor', 'status', 'chair']
