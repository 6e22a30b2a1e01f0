"""
This conftest.py provides fixtures shared by every app's tests.
"""

import secrets
import string
import typing as t
from datetime import datetime, time, timedelta

import faker
import pytest
from django.test.client import Client
from django.utils import timezone
from ninja_jwt.tokens import RefreshToken

from accounts.models import GatherlyUser


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Throttle history lives in the cache; start every test from scratch."""
    from django.core.cache import cache

    cache.clear()


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> None:
    """Enable Celery eager mode for tests so tasks execute synchronously.

    This ensures that Celery tasks run immediately in the same process,
    allowing tests to verify their side effects without async complications.
    """
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True


class GatherlyUserFactory:
    """Factory for creating GatherlyUser instances for testing."""

    fake = faker.Faker()

    def create_user(self, **kwargs: t.Any) -> GatherlyUser:
        username = kwargs.pop(
            "username", "".join(secrets.choice(string.ascii_lowercase) for _ in range(8)) + "@user.test"
        )
        email = kwargs.pop("email", username + ("@test.com" if "@" not in username else ""))
        password = kwargs.pop("password", "password")
        first_name = kwargs.pop("first_name", self.fake.first_name())
        last_name = kwargs.pop("last_name", self.fake.last_name())
        preferred_name = kwargs.pop("preferred_name", f"{first_name} {last_name}")
        pronouns = kwargs.pop("pronouns", secrets.choice(["they/them", "he/him", "she/her"]))
        return GatherlyUser.objects.create_user(
            username=username,
            email=email,
            password=password,
            pronouns=pronouns,
            preferred_name=preferred_name,
            first_name=first_name,
            last_name=last_name,
            **kwargs,
        )

    def __call__(self, **kwargs: t.Any) -> GatherlyUser:
        return self.create_user(**kwargs)


@pytest.fixture
def user_factory() -> GatherlyUserFactory:
    return GatherlyUserFactory()


@pytest.fixture
def user(user_factory: GatherlyUserFactory) -> GatherlyUser:
    """A standard, non-privileged user."""
    return user_factory(username="member@example.com", email="member@example.com")


@pytest.fixture
def superuser(user_factory: GatherlyUserFactory) -> GatherlyUser:
    """A superuser."""
    return user_factory(is_superuser=True, is_staff=True)


def client_for(user: GatherlyUser) -> Client:
    """An API client authenticated with a JWT for ``user``."""
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {str(refresh.access_token)}")  # type: ignore[attr-defined]


@pytest.fixture
def user_client(user: GatherlyUser) -> Client:
    """API client for a standard user."""
    return client_for(user)


@pytest.fixture
def superuser_client(superuser: GatherlyUser) -> Client:
    """API client for a superuser."""
    return client_for(superuser)


@pytest.fixture
def next_week() -> datetime:
    today = timezone.now()
    same_time_next_week = today + timedelta(days=7)
    noon = time(hour=12, minute=0)
    return timezone.make_aware(
        datetime.combine(same_time_next_week.date(), noon),
        timezone.get_current_timezone(),
    )
