# apps/settings_core/admin.py
from django.contrib import admin

from .models import RolePermissionConfig


@admin.register(RolePermissionConfig)
class RolePermissionConfigAdmin(admin.ModelAdmin):
    list_display = ('clinic', 'role', 'permissions_count', 'updated_at')
    list_filter = ('role', 'clinic')
    readonly_fields = ('clinic', 'created_by', 'created_at', 'updated_by', 'updated_at')

    def permissions_count(self, obj):
        return len(obj.permissions) if obj.permissions else 0
    permissions_count.short_description = 'Permissions Count'
