"""Typed access to runtime application settings.

Flags live in the ``AppSetting`` key/value table. Callers receive a
``SettingsProvider`` instead of querying the table themselves, which keeps the
lookups in one place and makes them trivial to fake in tests.
"""

import typing as t

import structlog

from .models import AppSetting

logger = structlog.get_logger(__name__)

T = t.TypeVar("T")

_TRUTHY = {"1", "true", "yes", "on"}


class SettingsProvider:
    """Read and write ``AppSetting`` values."""

    def get(self, key: str, default: t.Any = None, cast: t.Callable[[t.Any], T] | None = None) -> t.Any:
        """Return the value stored under ``key``, or ``default`` if it is not set.

        Args:
            key: The setting key.
            default: Returned when the key does not exist.
            cast: Optional callable applied to the stored value.
        """
        setting = AppSetting.objects.filter(key=key).only("value").first()
        if setting is None:
            return default
        if cast is None:
            return setting.value
        try:
            return cast(setting.value)
        except (TypeError, ValueError):
            logger.warning("app_setting_cast_failed", key=key, value=setting.value)
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Return a setting interpreted as a boolean."""
        return t.cast(bool, self.get(key, default=default, cast=_to_bool))

    def set(self, key: str, value: t.Any) -> AppSetting:
        """Create or update a setting."""
        setting, _created = AppSetting.objects.update_or_create(key=key, defaults={"value": value})
        logger.info("app_setting_updated", key=key)
        return setting


def _to_bool(value: t.Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    raise ValueError(f"Cannot interpret {value!r} as a boolean.")


def get_settings_provider() -> SettingsProvider:
    """Return the settings provider used by controllers."""
    return SettingsProvider()
