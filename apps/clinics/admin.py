# apps/clinics/admin.py
from django.contrib import admin

from .models import Branch, Clinic, Sequence


class BranchInline(admin.TabularInline):
    model = Branch
    extra = 0
    fields = ('code', 'name', 'phone', 'chair_count', 'is_active')
    readonly_fields = ('code',)
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        # Branch codes come from the per-clinic sequence
        return False


@admin.register(Clinic)
class ClinicAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'city', 'phone', 'email', 'created_at']
    search_fields = ['code', 'name', 'legal_name', 'email']
    readonly_fields = ['code', 'created_by', 'created_at', 'updated_by', 'updated_at']
    fieldsets = (
        ('Basic Information', {
            'fields': ('code', 'name', 'legal_name', 'registration_number', 'gstin')
        }),
        ('Contact Information', {
            'fields': ('phone', 'email', 'website', 'address', 'city', 'state', 'zip_code')
        }),
        ('Branding', {
            'fields': ('logo', 'primary_color'),
            'classes': ('collapse',)
        }),
        ('Audit Information', {
            'fields': ('created_by', 'created_at', 'updated_by', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
    inlines = [BranchInline]

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'clinic', 'phone', 'chair_count', 'is_active']
    list_filter = ['is_active', 'clinic']
    search_fields = ['code', 'name', 'address', 'phone']
    readonly_fields = ['clinic', 'code', 'created_by', 'created_at', 'updated_by', 'updated_at']

    def has_add_permission(self, request):
        return False


@admin.register(Sequence)
class SequenceAdmin(admin.ModelAdmin):
    list_display = ['scope', 'value']
    search_fields = ['scope']
    readonly_fields = ['scope', 'value']
