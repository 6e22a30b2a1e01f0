"""Tests for the Stripe webhook controller."""

from unittest.mock import MagicMock, Mock, patch

import pytest
import stripe
from django.conf import settings
from django.test.client import Client
from django.urls import reverse
from ninja.errors import HttpError

from events.controllers.stripe_webhook import StripeWebhookController

pytestmark = pytest.mark.django_db


class TestStripeWebhookController:
    """Test StripeWebhookController."""

    @pytest.fixture
    def controller(self) -> StripeWebhookController:
        return StripeWebhookController()

    @pytest.fixture
    def mock_request(self) -> Mock:
        request = Mock()
        request.body = b'{"test": "data"}'
        request.META = {"HTTP_STRIPE_SIGNATURE": "t=123,v1=signature"}
        return request

    @patch("stripe.Webhook.construct_event")
    @patch("events.service.stripe_webhooks.StripeEventHandler")
    def test_verified_event_is_dispatched(
        self,
        mock_handler_class: Mock,
        mock_construct_event: Mock,
        controller: StripeWebhookController,
        mock_request: Mock,
    ) -> None:
        # Arrange
        stripe_event = MagicMock(spec=stripe.Event)
        mock_construct_event.return_value = stripe_event

        # Act
        status, response = controller.handle_webhook(mock_request)

        # Assert
        mock_construct_event.assert_called_once_with(
            mock_request.body, "t=123,v1=signature", settings.STRIPE_WEBHOOK_SECRET
        )
        mock_handler_class.assert_called_once_with(stripe_event)
        mock_handler_class.return_value.handle.assert_called_once()
        assert status == 200
        assert response is None

    def test_missing_signature_is_rejected(self, controller: StripeWebhookController, mock_request: Mock) -> None:
        mock_request.META = {}

        with pytest.raises(HttpError) as exc_info:
            controller.handle_webhook(mock_request)

        assert exc_info.value.status_code == 400

    @patch("stripe.Webhook.construct_event")
    def test_invalid_signature_is_rejected(
        self, mock_construct_event: Mock, controller: StripeWebhookController, mock_request: Mock
    ) -> None:
        mock_construct_event.side_effect = stripe.SignatureVerificationError("Invalid signature", "sig_header")

        with pytest.raises(HttpError) as exc_info:
            controller.handle_webhook(mock_request)

        assert exc_info.value.status_code == 400

    @patch("stripe.Webhook.construct_event")
    def test_malformed_payload_is_rejected(
        self, mock_construct_event: Mock, controller: StripeWebhookController, mock_request: Mock
    ) -> None:
        mock_construct_event.side_effect = ValueError("Invalid payload")

        with pytest.raises(HttpError):
            controller.handle_webhook(mock_request)

    def test_endpoint_rejects_unsigned_requests(self, client: Client) -> None:
        response = client.post(reverse("api:stripe_webhook"), data=b"{}", content_type="application/json")

        assert response.status_code == 400
