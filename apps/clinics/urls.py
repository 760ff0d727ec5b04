from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import BranchViewSet

app_name = 'clinics'

router = DefaultRouter()
router.register(r'branches', BranchViewSet, basename='branch')

urlpatterns = [
    path('', include(router.urls)),
]
