import django_filters

from .models import Invoice


class InvoiceFilter(django_filters.FilterSet):
    patient = django_filters.NumberFilter(field_name='patient_id')
    doctor = django_filters.NumberFilter(field_name='doctor_id')

    class Meta:
        model = Invoice
        fields = ['status', 'patient', 'doctor']
