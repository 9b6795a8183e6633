"""
Rotación de llaves de SinoPac.

El banco entrega tres pares de llave/cuenta; cada sesión de cliente elige uno al azar
(reparto de carga, no es un mecanismo de seguridad) y lo usa en todos sus intentos.
"""
import random
from dataclasses import dataclass

from ..config import KEY_SLOTS
from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class Credential:
    account_id: str
    secret: str | bytes


class KeyRing:
    def __init__(self, config, rng: random.Random | None = None):
        self.config = config
        self.rng = rng or random.Random()

    def select(self) -> int:
        """Devuelve un número de llave uniforme en {1, 2, 3}."""
        return self.rng.choice(KEY_SLOTS)

    def resolve(self, index: int) -> Credential:
        if index not in KEY_SLOTS:
            raise ConfigurationError(f"KeyNum fuera de rango: {index}")
        secret = self.config.secrets[index - 1]
        if not secret:
            raise ConfigurationError(f"SINOPAC_API_KEY_DATA{index} no configurada")
        return Credential(account_id=self.config.account, secret=secret)
