import os

from .base import DEBUG

# --------------------------------------------------------------------------------------
# Integraciones ( SinoPac )
# --------------------------------------------------------------------------------------
SINOPAC_ACCOUNT = os.getenv("SINOPAC_ACCOUNT", "")
# Tres llaves independientes; el cliente elige una al azar por sesión.
SINOPAC_API_KEY_DATA1 = os.getenv("SINOPAC_API_KEY_DATA1", "")
SINOPAC_API_KEY_DATA2 = os.getenv("SINOPAC_API_KEY_DATA2", "")
SINOPAC_API_KEY_DATA3 = os.getenv("SINOPAC_API_KEY_DATA3", "")
SINOPAC_MODE = os.getenv("SINOPAC_MODE", "development" if DEBUG else "production")
SINOPAC_CONFIRMATION_URL = os.getenv("SINOPAC_CONFIRMATION_URL", "")
SINOPAC_SSL_STRICT = os.getenv("SINOPAC_SSL_STRICT", "0") in ("1", "true", "True")

try:
    SINOPAC_REQUEST_TIMEOUT = int(os.getenv("SINOPAC_REQUEST_TIMEOUT", "15"))
except ValueError:
    SINOPAC_REQUEST_TIMEOUT = 15

try:
    SINOPAC_MAX_RETRIES = int(os.getenv("SINOPAC_MAX_RETRIES", "10"))
except ValueError:
    SINOPAC_MAX_RETRIES = 10

try:
    SINOPAC_RETRY_BACKOFF = float(os.getenv("SINOPAC_RETRY_BACKOFF", "1"))
except ValueError:
    SINOPAC_RETRY_BACKOFF = 1.0
