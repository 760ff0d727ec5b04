import django_filters

from .models import ClinicalNote


class ClinicalNoteFilter(django_filters.FilterSet):
    patient = django_filters.NumberFilter(field_name='patient_id')

    class Meta:
        model = ClinicalNote
        fields = ['patient', 'type']
