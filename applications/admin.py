"""
Django admin configuration for applications app.
"""
from django.contrib import admin

from applications.infrastructure.models import Application


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    """Admin interface for Application model."""

    list_display = ["app_id", "name", "owner_id"]
    search_fields = ["app_id", "name", "owner_id"]
