"""
Configuración inmutable de SinoPac.

Se construye una sola vez desde django.conf.settings y se inyecta en cada componente;
ningún componente vuelve a consultar settings por su cuenta.
"""
from dataclasses import dataclass

from django.conf import settings

from .exceptions import ConfigurationError


PRODUCTION_HOST = "ecapi.sinopac.com"
SANDBOX_HOST = "sandbox.sinopac.com"

_MODE_HOSTS = {
    "production": PRODUCTION_HOST,
    "development": SANDBOX_HOST,
    "test": SANDBOX_HOST,
}

ORDER_PATH = "/WebAPI/Service.svc/CreateATMorIBonTrans"
REDIRECT_PATH = "/SinoPacWebCard/Pages/PageRedirect.aspx"

KEY_SLOTS = (1, 2, 3)


@dataclass(frozen=True)
class GatewaySettings:
    account: str
    secrets: tuple
    mode: str = "production"
    confirmation_url: str = ""
    ssl_strict: bool = False
    request_timeout: float = 15
    max_retries: int = 10
    retry_backoff: float = 1.0

    def __post_init__(self):
        if len(self.secrets) != len(KEY_SLOTS):
            raise ConfigurationError(
                f"Se esperaban {len(KEY_SLOTS)} llaves de SinoPac, se recibieron {len(self.secrets)}."
            )

    @classmethod
    def from_settings(cls, **overrides):
        """Lee las variables SINOPAC_* de Django; los overrides ganan sobre settings."""
        values = {
            "account": getattr(settings, "SINOPAC_ACCOUNT", ""),
            "secrets": tuple(
                getattr(settings, f"SINOPAC_API_KEY_DATA{slot}", "") or None for slot in KEY_SLOTS
            ),
            "mode": getattr(settings, "SINOPAC_MODE", "production"),
            "confirmation_url": getattr(settings, "SINOPAC_CONFIRMATION_URL", ""),
            "ssl_strict": bool(getattr(settings, "SINOPAC_SSL_STRICT", False)),
            "request_timeout": getattr(settings, "SINOPAC_REQUEST_TIMEOUT", 15),
            "max_retries": getattr(settings, "SINOPAC_MAX_RETRIES", 10),
            "retry_backoff": getattr(settings, "SINOPAC_RETRY_BACKOFF", 1.0),
        }
        values.update(overrides)
        return cls(**values)

    @property
    def api_host(self):
        try:
            return _MODE_HOSTS[self.mode]
        except KeyError:
            raise ConfigurationError(f"Integration mode set to an invalid value: {self.mode}") from None

    @property
    def is_test(self):
        # development también apunta al sandbox
        return self.mode in ("test", "development")

    @property
    def order_url(self):
        return f"https://{self.api_host}{ORDER_PATH}"

    @property
    def redirect_url(self):
        return f"https://{self.api_host}{REDIRECT_PATH}"
