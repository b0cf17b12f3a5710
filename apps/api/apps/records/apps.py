"""Records app configuration."""
from django.apps import AppConfig


class RecordsConfig(AppConfig):
    """Configuration for records app."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.records'
    verbose_name = 'Patient Records'
