import pytest
from django.core import mail

from common.models import SiteSettings
from common.tasks import send_email, to_safe_email_address

pytestmark = pytest.mark.django_db


def test_addresses_are_redirected_to_the_catchall() -> None:
    assert to_safe_email_address("ada@example.com") == "catchall+ada_at_example_dot_com@gatherly.local"


def test_live_emails_are_delivered_as_is() -> None:
    site_settings = SiteSettings.get_solo()
    site_settings.live_emails = True
    site_settings.save()

    assert to_safe_email_address("ada@example.com") == "ada@example.com"


def test_send_email_with_html_alternative() -> None:
    send_email(to=["a@example.com", "b@example.com"], subject="Hi", body="Plain", html_body="<p>Rich</p>")

    assert len(mail.outbox) == 1
    message = mail.outbox[0]
    assert message.subject == "Hi"
    assert len(message.bcc) == 2
    assert message.alternatives[0][0] == "<p>Rich</p>"
