from django.contrib import admin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('receipt_number', 'patient', 'amount', 'method', 'date', 'branch')
    list_filter = ('method', 'branch')
    search_fields = ('receipt_number', 'transaction_id')
    readonly_fields = ('receipt_number',)
