from decouple import config

DEFAULT_CURRENCY = config("DEFAULT_CURRENCY", "EUR")
STRIPE_SECRET_KEY = config("STRIPE_SECRET_KEY", default="sk_test_...")
STRIPE_PUBLISHABLE_KEY = config("STRIPE_PUBLISHABLE_KEY", default="pk_test_...")
STRIPE_WEBHOOK_SECRET = config("STRIPE_WEBHOOK_SECRET", default="whsec_...")
# Note: Stripe requires at least 30 minutes
PAYMENT_DEFAULT_EXPIRY_MINUTES = config("PAYMENT_DEFAULT_EXPIRY_MINUTES", cast=int, default=45)
# Checkouts paid right before expiry may confirm late; the sweep waits this long past expiry
PAYMENT_EXPIRY_GRACE_MINUTES = config("PAYMENT_EXPIRY_GRACE_MINUTES", cast=int, default=15)
