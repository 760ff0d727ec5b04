from django.contrib import admin

from .models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('start', 'title', 'doctor', 'branch', 'chair', 'status')
    list_filter = ('status', 'branch')
    search_fields = ('title', 'phone')
