import re
import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class GatherlyUserQueryset(models.QuerySet["GatherlyUser"]):
    """Queryset for GatherlyUser."""


class GatherlyUserManager(UserManager["GatherlyUser"]):
    def get_queryset(self) -> GatherlyUserQueryset:
        """Get queryset for GatherlyUser."""
        return GatherlyUserQueryset(self.model)


class GatherlyUser(AbstractUser):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    preferred_name = models.CharField(db_index=True, max_length=255, blank=True, help_text="Preferred name")
    pronouns = models.CharField(max_length=10, blank=True, help_text="Pronouns")

    objects = GatherlyUserManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]

    @property
    def display_name(self) -> str:
        """Display name."""
        return self.get_display_name()

    def get_display_name(self) -> str:
        """Returns the user's preferred name, or their full name as a fallback."""
        return (
            self.preferred_name or self.get_full_name() or re.sub(r"(\W|_)+", " ", self.username.split("@")[0]).title()
        )
