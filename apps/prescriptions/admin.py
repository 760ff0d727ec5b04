from django.contrib import admin

from .models import Drug, Prescription


@admin.register(Drug)
class DrugAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'generic_name', 'clinic')
    search_fields = ('name', 'generic_name')


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'branch', 'date')
    list_filter = ('branch',)
