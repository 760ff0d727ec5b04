from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ExpenseViewSet, InvoiceViewSet

router = DefaultRouter()
router.register(r'invoices', InvoiceViewSet, basename='invoice')
router.register(r'expenses', ExpenseViewSet, basename='expense')

app_name = 'billing'

urlpatterns = [
    path('', include(router.urls)),
]
