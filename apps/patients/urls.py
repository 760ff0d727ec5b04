# apps/patients/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ClinicalNoteViewSet, PatientViewSet

router = DefaultRouter()
# notes first so "notes" is never taken for a patient lookup
router.register(r'notes', ClinicalNoteViewSet, basename='clinical-note')
router.register(r'', PatientViewSet, basename='patient')

app_name = 'patients'

urlpatterns = [
    path('', include(router.urls)),
]
