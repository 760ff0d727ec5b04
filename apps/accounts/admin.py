from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import User


# === USER ADMIN ===
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Staff accounts with their clinic and branch assignments"""

    list_display = ('email', 'full_name', 'clinic', 'role', 'status', 'default_branch', 'created_at')
    list_filter = ('role', 'status', 'is_staff', 'is_superuser', 'clinic')
    search_fields = ('email', 'full_name', 'phone')
    ordering = ('-created_at',)
    filter_horizontal = ('allowed_branches', 'groups', 'user_permissions')

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        (_('Personal Info'), {'fields': ('full_name', 'phone')}),
        (_('Clinic & Branches'), {'fields': ('clinic', 'role', 'default_branch', 'allowed_branches')}),
        (_('Status'), {'fields': ('status', 'must_change_password', 'commission_percentage')}),
        (_('Permissions'), {
            'fields': ('is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',)
        }),
        (_('Important dates'), {
            'fields': ('last_login', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'clinic', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = ('last_login', 'created_at', 'updated_at')
