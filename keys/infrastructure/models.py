"""
Key model.
"""

from django.db import models
from django.utils import timezone


class Key(models.Model):
    """
    A license key issued for an application.

    ``app_id`` is checked against registered applications when the key is
    issued; it is not a database foreign key.
    """

    STATUS_CHOICES = [
        ("unused", "Unused"),
        ("used", "Used"),
        ("expired", "Expired"),
    ]

    key = models.CharField(max_length=100, unique=True)
    app_id = models.CharField(max_length=100, db_index=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="unused")
    created_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField(null=True, blank=True)
    user_discord_id = models.CharField(max_length=100, null=True, blank=True)

    class Meta:
        db_table = "keys"
        indexes = [
            models.Index(fields=["app_id", "status"]),
            models.Index(fields=["app_id", "expires_at"]),
        ]

    def __str__(self):
        return self.key
