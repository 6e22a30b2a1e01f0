"""This module contains the controllers for the accounts app."""

from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from accounts.models import GatherlyUser
from accounts.schema import GatherlyUserSchema, ProfileUpdateSchema
from common.controllers import UserAwareController
from common.throttling import WriteThrottle


@api_controller("/account", tags=["Account"], auth=JWTAuth())
class AccountController(UserAwareController):
    @route.get("/me", response=GatherlyUserSchema, url_name="me")
    def me(self) -> GatherlyUser:
        """Retrieve the authenticated user's profile information."""
        return self.user()

    @route.put("/me", response=GatherlyUserSchema, url_name="update_me", throttle=WriteThrottle())
    def update_me(self, payload: ProfileUpdateSchema) -> GatherlyUser:
        """Update the authenticated user's display details."""
        user = self.user()
        for attr, value in payload.model_dump().items():
            setattr(user, attr, value)
        user.save(update_fields=list(payload.model_dump().keys()))
        return user
