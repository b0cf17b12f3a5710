from django.contrib import admin
from .models import Vital, RecordFile, Note, Prescription


@admin.register(Vital)
class VitalAdmin(admin.ModelAdmin):
    list_display = ['patient', 'bp', 'sugar', 'heart_rate', 'created_at']
    search_fields = ['patient__email']
    autocomplete_fields = ['patient']
    date_hierarchy = 'created_at'


@admin.register(RecordFile)
class RecordFileAdmin(admin.ModelAdmin):
    list_display = ['patient', 'file_name', 'content_type', 'created_at']
    search_fields = ['patient__email', 'file_name']
    autocomplete_fields = ['patient']
    date_hierarchy = 'created_at'


@admin.register(Note)
class NoteAdmin(admin.ModelAdmin):
    list_display = ['patient', 'doctor', 'created_at']
    search_fields = ['patient__email', 'doctor__email']
    autocomplete_fields = ['patient', 'doctor']
    date_hierarchy = 'created_at'


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    list_display = ['patient', 'doctor', 'created_at']
    search_fields = ['patient__email', 'doctor__email']
    autocomplete_fields = ['patient', 'doctor']
    date_hierarchy = 'created_at'
