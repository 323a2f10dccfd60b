"""
Bot user model.
"""

from django.db import models


class BotUser(models.Model):
    """
    A caller identity and whether it may use the key service.

    Rows are created implicitly the first time an operator enables or
    disables a caller.
    """

    discord_id = models.CharField(max_length=100, unique=True, help_text="Caller Discord ID")
    is_bot_enabled = models.BooleanField(default=True)

    class Meta:
        db_table = "users"
        ordering = ["discord_id"]

    def __str__(self):
        state = "enabled" if self.is_bot_enabled else "disabled"
        return f"{self.discord_id} ({state})"
