from django.apps import AppConfig


class TreatmentsConfig(AppConfig):
    name = 'apps.treatments'
    verbose_name = 'Procedures'
