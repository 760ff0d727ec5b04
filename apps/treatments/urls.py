from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ProcedureViewSet

router = DefaultRouter()
router.register(r'procedures', ProcedureViewSet, basename='procedure')

app_name = 'treatments'

urlpatterns = [
    path('', include(router.urls)),
]
