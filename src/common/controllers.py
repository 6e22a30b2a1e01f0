import typing as t

from django.contrib.auth.models import AnonymousUser
from django.http import Http404
from ninja_extra import ControllerBase, api_controller, route
from ninja_extra.permissions import IsAdminUser
from ninja_jwt.authentication import JWTAuth

from accounts.models import GatherlyUser
from common.config import SettingsProvider, get_settings_provider
from common.schema import AppSettingSchema, AppSettingUpdateSchema
from common.throttling import WriteThrottle


class UserAwareController(ControllerBase):
    def maybe_user(self) -> GatherlyUser | AnonymousUser:
        """Get the user for this request."""
        return t.cast(GatherlyUser | AnonymousUser, self.context.request.user)  # type: ignore[union-attr]

    def user(self) -> GatherlyUser:
        """Get the user for this request."""
        return t.cast(GatherlyUser, self.context.request.user)  # type: ignore[union-attr]


@api_controller("/settings", tags=["Settings"])
class AppSettingController(UserAwareController):
    @property
    def provider(self) -> SettingsProvider:
        """The settings provider backing this controller."""
        return get_settings_provider()

    @route.get("/{key}", url_name="get_app_setting", response=AppSettingSchema)
    def get_setting(self, key: str) -> AppSettingSchema:
        """Read a runtime application flag (e.g. `quiz_onboarding_enabled`).

        Returns 404 when the flag has never been set.
        """
        sentinel = object()
        value = self.provider.get(key, default=sentinel)
        if value is sentinel:
            raise Http404()
        return AppSettingSchema(key=key, value=value)

    @route.put(
        "/{key}",
        url_name="set_app_setting",
        response=AppSettingSchema,
        auth=JWTAuth(),
        permissions=[IsAdminUser],
        throttle=WriteThrottle(),
    )
    def set_setting(self, key: str, payload: AppSettingUpdateSchema) -> AppSettingSchema:
        """Create or update a runtime application flag. Staff only."""
        setting = self.provider.set(key, payload.value)
        return AppSettingSchema(key=setting.key, value=setting.value)
