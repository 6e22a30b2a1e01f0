import pytest
from django.test.client import Client
from django.urls import reverse

from accounts.models import GatherlyUser

pytestmark = pytest.mark.django_db


def test_me_requires_authentication(client: Client) -> None:
    response = client.get(reverse("api:me"))

    assert response.status_code == 401


def test_me_returns_the_profile(user_client: Client, user: GatherlyUser) -> None:
    response = user_client.get(reverse("api:me"))

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(user.id)
    assert data["email"] == "member@example.com"
    assert data["display_name"] == user.display_name
    assert data["is_staff"] is False


def test_update_me(user_client: Client, user: GatherlyUser) -> None:
    payload = {"preferred_name": "  Robin  ", "pronouns": "they/them", "first_name": "Robin", "last_name": "Bianchi"}

    response = user_client.put(reverse("api:update_me"), data=payload, content_type="application/json")

    assert response.status_code == 200
    assert response.json()["display_name"] == "Robin"
    user.refresh_from_db()
    assert user.preferred_name == "Robin"
    assert user.pronouns == "they/them"


def test_obtain_token_pair(client: Client, user: GatherlyUser) -> None:
    response = client.post(
        reverse("api:token_obtain_pair"),
        data={"username": "member@example.com", "password": "password"},
        content_type="application/json",
    )

    assert response.status_code == 200
    assert {"access", "refresh"} <= set(response.json())
