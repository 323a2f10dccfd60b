"""
Application model.
"""

from django.db import models


class Application(models.Model):
    """
    A registered application that license keys are issued for.
    """

    app_id = models.CharField(max_length=100, unique=True, help_text="Public application identifier")
    owner_id = models.CharField(max_length=100, help_text="Identity of the registering party")
    name = models.CharField(max_length=255, help_text="Application display name")

    class Meta:
        db_table = "apps"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.app_id})"
