from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import DrugViewSet, PrescriptionViewSet

router = DefaultRouter()
router.register(r'drugs', DrugViewSet, basename='drug')
router.register(r'', PrescriptionViewSet, basename='prescription')

app_name = 'prescriptions'

urlpatterns = [
    path('', include(router.urls)),
]
