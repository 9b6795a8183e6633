"""
Settings para pytest: no dependen de un .env real.
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production-use-0123456789")
os.environ.setdefault("DEBUG", "1")

from .base import *  # noqa: E402,F401,F403
from .integrations import *  # noqa: E402,F401,F403
from .logging import *  # noqa: E402,F401,F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

SINOPAC_ACCOUNT = "NA0001_001"
SINOPAC_API_KEY_DATA1 = "key-data-one"
SINOPAC_API_KEY_DATA2 = "key-data-two"
SINOPAC_API_KEY_DATA3 = "key-data-three"
SINOPAC_MODE = "test"
SINOPAC_CONFIRMATION_URL = "https://sandbox.sinopac.com/confirm"
SINOPAC_SSL_STRICT = False
SINOPAC_MAX_RETRIES = 10
SINOPAC_RETRY_BACKOFF = 0
