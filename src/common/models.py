import typing as t
import uuid

from django.conf import settings
from django.db import models
from solo.models import SingletonModel


class TimeStampedModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        abstract = True

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Override the save method to call full_clean before saving."""
        self.full_clean()
        super().save(*args, **kwargs)


class SiteSettings(SingletonModel):
    """Singleton model for common application settings."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    frontend_base_url = models.URLField(default=settings.FRONTEND_BASE_URL)
    live_emails = models.BooleanField(default=False, help_text="Live-emails enabled")
    internal_catchall_email = models.EmailField(
        default="catchall@gatherly.local", help_text="Receives every email while live emails are off"
    )

    def __str__(self) -> str:  # pragma: no cover
        return "Common Settings"

    class Meta:
        verbose_name = "Common Settings"
        verbose_name_plural = "Common Settings"


class AppSetting(TimeStampedModel):
    """A runtime key/value flag editable by administrators (e.g. ``quiz_onboarding_enabled``)."""

    key = models.CharField(max_length=128, unique=True, db_index=True)
    value = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["key"]

    def __str__(self) -> str:
        return self.key
