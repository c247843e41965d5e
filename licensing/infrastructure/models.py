"""
Settings model.
"""
from django.db import models


class Setting(models.Model):
    """
    Key/value row of the settings table.

    The license certificate is stored under ``license.cert``.
    """

    key = models.CharField(max_length=255, primary_key=True)
    value = models.TextField(blank=True, default="")
    load_on_startup = models.BooleanField(
        default=False, help_text="Whether the value is loaded into memory at startup"
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "licensing"
        db_table = "settings"
        ordering = ["key"]

    def __str__(self):
        return self.key
