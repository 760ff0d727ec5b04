from django.contrib import admin

from .models import ClinicalNote, Patient, TreatmentItem


class TreatmentItemInline(admin.TabularInline):
    model = TreatmentItem
    extra = 0
    readonly_fields = ('date', 'is_billed')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('code', 'full_name', 'mobile', 'clinic', 'branch', 'is_active', 'total_cost', 'total_paid')
    list_filter = ('is_active', 'gender', 'clinic')
    search_fields = ('code', 'full_name', 'mobile')
    readonly_fields = ('code', 'clinic', 'branch', 'total_cost', 'total_paid', 'created_at', 'updated_at')
    inlines = [TreatmentItemInline]


@admin.register(ClinicalNote)
class ClinicalNoteAdmin(admin.ModelAdmin):
    list_display = ('patient', 'type', 'doctor_name', 'visit_date', 'branch')
    list_filter = ('type',)
