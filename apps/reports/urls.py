# apps/reports/urls.py

from django.urls import path

from .views import AdminDashboardView, DoctorDashboardView, ReceptionDashboardView

app_name = 'reports'

urlpatterns = [
    path('reception/', ReceptionDashboardView.as_view(), name='reception-dashboard'),
    path('doctor/', DoctorDashboardView.as_view(), name='doctor-dashboard'),
    path('admin/', AdminDashboardView.as_view(), name='admin-dashboard'),
]
