"""Summaries app configuration."""
from django.apps import AppConfig


class SummariesConfig(AppConfig):
    """Configuration for summaries app."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.summaries'
    verbose_name = 'Health Summaries'
