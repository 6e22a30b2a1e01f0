"""Admin interface for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from unfold.admin import ModelAdmin

from accounts.models import GatherlyUser


@admin.register(GatherlyUser)
class GatherlyUserAdmin(UserAdmin, ModelAdmin):  # type: ignore[misc]
    list_display = ["username", "email", "preferred_name", "first_name", "last_name", "is_staff", "is_active"]
    search_fields = ["username", "email", "preferred_name", "first_name", "last_name"]
    ordering = ["username"]
    fieldsets = (
        *UserAdmin.fieldsets,  # type: ignore[misc]
        ("Profile", {"fields": ("preferred_name", "pronouns")}),
    )
