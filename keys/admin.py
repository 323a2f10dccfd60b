"""
Django admin configuration for keys app.
"""
from asgiref.sync import async_to_sync
from django.contrib import admin, messages

from core.domain.exceptions import KeyException
from keys.application.commands.mark_key_used import MarkKeyUsedCommand
from keys.application.handlers.key_lifecycle_handlers import MarkKeyUsedHandler
from keys.infrastructure.container import build_key_manager
from keys.infrastructure.models import Key


@admin.register(Key)
class KeyAdmin(admin.ModelAdmin):
    """Admin interface for Key model."""

    list_display = [
        "key",
        "app_id",
        "status",
        "created_at",
        "expires_at",
        "user_discord_id",
    ]
    list_filter = ["status", "created_at", "expires_at"]
    search_fields = ["key", "app_id", "user_discord_id"]
    readonly_fields = ["key", "app_id", "status", "created_at", "expires_at"]
    actions = ["mark_used"]

    @admin.action(description="Mark selected keys as used")
    def mark_used(self, request, queryset):
        """Move the selected unused keys to the used status."""
        handler = MarkKeyUsedHandler(key_manager=build_key_manager())
        updated = 0
        for key in queryset:
            try:
                async_to_sync(handler.handle)(MarkKeyUsedCommand(key=key.key))
                updated += 1
            except KeyException as e:
                self.message_user(request, e.message, level=messages.WARNING)
        self.message_user(request, f"Marked {updated} key(s) as used", level=messages.SUCCESS)
