"""
Django admin configuration for access app.
"""
from django.contrib import admin

from access.infrastructure.models import BotUser


@admin.register(BotUser)
class BotUserAdmin(admin.ModelAdmin):
    """Admin interface for BotUser model."""

    list_display = ["discord_id", "is_bot_enabled"]
    list_filter = ["is_bot_enabled"]
    search_fields = ["discord_id"]
