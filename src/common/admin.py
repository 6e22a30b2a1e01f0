from django.contrib import admin
from solo.admin import SingletonModelAdmin
from unfold.admin import ModelAdmin

from . import models


@admin.register(models.SiteSettings)
class SiteSettingsAdmin(SingletonModelAdmin, ModelAdmin):  # type: ignore[misc]
    list_display = ["__str__", "frontend_base_url", "live_emails", "internal_catchall_email"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(models.AppSetting)
class AppSettingAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["key", "value", "updated_at"]
    search_fields = ["key"]
    readonly_fields = ["created_at", "updated_at"]
