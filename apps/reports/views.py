# apps/reports/views.py

from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import IsAdministrator

from . import services


class ReceptionDashboardView(APIView):
    """Front desk view of the active branch"""

    def get(self, request):
        return Response(services.reception_dashboard(request.tenant))


class DoctorDashboardView(APIView):
    """Today's schedule for the requesting doctor"""

    def get(self, request):
        return Response(services.doctor_dashboard(request.tenant))


class AdminDashboardView(APIView):
    """
    Revenue, expenses and activity rollup.
    Administrators without a branch selected get the whole clinic.
    """

    def get_permissions(self):
        return super().get_permissions() + [IsAdministrator()]

    def get(self, request):
        return Response(services.admin_dashboard(request.tenant))
