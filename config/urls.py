from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from apps.accounts.urls import auth_urlpatterns

urlpatterns = [
    path('admin/', admin.site.urls),

    # API endpoints
    path('api/auth/', include((auth_urlpatterns, 'auth'))),
    path('api/accounts/', include('apps.accounts.urls')),
    path('api/audit/', include('apps.audit.urls')),
    path('api/clinics/', include('apps.clinics.urls')),
    path('api/settings/', include('apps.settings_core.urls')),

    path('api/patients/', include('apps.patients.urls')),
    path('api/appointments/', include('apps.appointments.urls')),
    path('api/prescriptions/', include('apps.prescriptions.urls')),
    path('api/treatments/', include('apps.treatments.urls')),

    path('api/billing/', include('apps.billing.urls')),
    path('api/payments/', include('apps.payments.urls')),
    path('api/inventory/', include('apps.inventory.urls')),
    path('api/reports/', include('apps.reports.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
