from datetime import datetime, timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone

from common.models import TimeStampedModel


def _get_payment_default_expiry() -> datetime:
    return timezone.now() + timedelta(minutes=settings.PAYMENT_DEFAULT_EXPIRY_MINUTES)


class PaymentQuerySet(models.QuerySet["Payment"]):
    def expired_pending(self) -> "PaymentQuerySet":
        """Pending payments whose checkout window closed more than the grace period ago."""
        cutoff = timezone.now() - timedelta(minutes=settings.PAYMENT_EXPIRY_GRACE_MINUTES)
        return self.filter(status=Payment.PaymentStatus.PENDING, expires_at__lt=cutoff)


class Payment(TimeStampedModel):
    class PaymentStatus(models.TextChoices):
        PENDING = "pending"
        SUCCEEDED = "succeeded"
        FAILED = "failed"
        REFUNDED = "refunded"

    participant = models.OneToOneField("events.Participant", on_delete=models.CASCADE, related_name="payment")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="payments")
    stripe_session_id = models.CharField(max_length=255, unique=True, db_index=True)
    stripe_payment_intent_id = models.CharField(
        max_length=255, null=True, blank=True, db_index=True, help_text="Stripe PaymentIntent ID for refund processing"
    )
    status = models.CharField(max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    currency = models.CharField(max_length=3, default=settings.DEFAULT_CURRENCY)
    raw_response = models.JSONField(blank=True, default=dict)  # last webhook payload, for auditing
    expires_at = models.DateTimeField(default=_get_payment_default_expiry, db_index=True, editable=False)
    refunded_at = models.DateTimeField(null=True, blank=True)

    objects = PaymentQuerySet.as_manager()

    def __str__(self) -> str:
        return f"Payment {self.id} for Participant {self.participant_id}"

    @staticmethod
    def stripe_mode() -> str:
        """Stripe mode."""
        key: str = settings.STRIPE_SECRET_KEY
        return "test" if key.startswith("sk_test_") else "live"

    def stripe_dashboard_url(self) -> str:
        """Return the stripe dashboard URL."""
        mode: str = self.stripe_mode()
        if self.stripe_payment_intent_id:
            return f"https://dashboard.stripe.com/{mode}/payments/{self.stripe_payment_intent_id}"
        return f"https://dashboard.stripe.com/{mode}/checkout/sessions/{self.stripe_session_id}"
