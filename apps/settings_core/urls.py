# apps/settings_core/urls.py

from django.urls import path

from apps.clinics.views import ClinicProfileView

from .views import RolePermissionView

app_name = 'settings_core'

urlpatterns = [
    path('roles/', RolePermissionView.as_view(), name='role-permissions'),
    path('clinic/', ClinicProfileView.as_view(), name='clinic-profile'),
]
