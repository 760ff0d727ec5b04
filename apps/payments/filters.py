import django_filters

from .models import Payment


class PaymentFilter(django_filters.FilterSet):
    patient = django_filters.NumberFilter(field_name='patient_id')
    invoice = django_filters.NumberFilter(field_name='invoice_id')

    class Meta:
        model = Payment
        fields = ['patient', 'invoice', 'method']
