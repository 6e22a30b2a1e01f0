"""Schema for accounts module."""

from ninja import ModelSchema, Schema
from pydantic import UUID4, Field

from common.schema import StrippedString

from .models import GatherlyUser


class GatherlyUserSchema(ModelSchema):
    id: UUID4
    email: str
    preferred_name: str
    pronouns: str
    first_name: str
    last_name: str
    is_staff: bool
    display_name: str

    class Meta:
        model = GatherlyUser
        fields = ["email", "first_name", "last_name", "preferred_name", "pronouns", "is_staff"]


class MinimalGatherlyUserSchema(ModelSchema):
    id: UUID4
    display_name: str

    class Meta:
        model = GatherlyUser
        fields = ["preferred_name", "pronouns", "first_name", "last_name"]


class ProfileUpdateSchema(Schema):
    preferred_name: StrippedString = Field("", max_length=255)
    pronouns: StrippedString = Field("", max_length=10)
    first_name: StrippedString = Field("", max_length=150)
    last_name: StrippedString = Field("", max_length=150)
