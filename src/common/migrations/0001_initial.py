import uuid

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SiteSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("frontend_base_url", models.URLField(default="http://localhost:3000")),
                ("live_emails", models.BooleanField(default=False, help_text="Live-emails enabled")),
                (
                    "internal_catchall_email",
                    models.EmailField(
                        default="catchall@gatherly.local",
                        help_text="Receives every email while live emails are off",
                        max_length=254,
                    ),
                ),
            ],
            options={
                "verbose_name": "Common Settings",
                "verbose_name_plural": "Common Settings",
            },
        ),
        migrations.CreateModel(
            name="AppSetting",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("key", models.CharField(db_index=True, max_length=128, unique=True)),
                ("value", models.JSONField(blank=True, default=dict)),
            ],
            options={
                "ordering": ["key"],
            },
        ),
    ]
