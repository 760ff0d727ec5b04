from django.contrib import admin

from .models import Procedure


@admin.register(Procedure)
class ProcedureAdmin(admin.ModelAdmin):
    list_display = ('code', 'name', 'clinic', 'price', 'commission', 'is_active')
    list_filter = ('is_active', 'clinic')
    search_fields = ('code', 'name')
