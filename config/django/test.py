import structlog

from .base import *  # noqa

DEBUG = False

SECRET_KEY = "test-secret-key-not-for-production-use-only-in-tests"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

WALLET_IDENTITY_COMPENSATION_ATTEMPTS = 2

# structlog.testing.capture_logs needs loggers that are not cached.
structlog.configure(cache_logger_on_first_use=False)

WALLET_AUTHORIZE_THROTTLE_RATE = "1000/min"
