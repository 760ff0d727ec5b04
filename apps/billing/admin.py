from django.contrib import admin

from .models import Expense, Invoice, InvoiceItem


class InvoiceItemInline(admin.TabularInline):
    model = InvoiceItem
    extra = 0


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ('invoice_number', 'patient', 'branch', 'final_amount', 'paid_amount', 'status', 'created_at')
    list_filter = ('status', 'branch')
    search_fields = ('invoice_number',)
    readonly_fields = ('invoice_number', 'paid_amount')
    inlines = [InvoiceItemInline]


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ('date', 'title', 'category', 'amount', 'branch')
    list_filter = ('category', 'branch')
