"""
Cliente challenge-response de la API XML de SinoPac.

El banco emite un nonce nuevo por petición, así que el primer POST siempre vuelve
con 401 + WWW-Authenticate: de ahí se toma el desafío, se calcula el verifycode y se
reenvía. Ese ciclo es el camino normal, no un modo degradado.

Estados: INITIAL -> AWAITING_CHALLENGE -> AUTHENTICATED | EXHAUSTED
"""
import logging
import random
import re
import time
from dataclasses import dataclass
from enum import Enum

import requests

from . import digest
from .keyring import KeyRing
from ..exceptions import ChallengeParseError, RetryBudgetExhausted
from ..metrics import gateway_attempts, gateway_latency


logger = logging.getLogger(__name__)

_CHALLENGE_PARAM = re.compile(r'(\w+)\s*=\s*(?:"([^"]*)"|([^\s,]+))')


class ClientState(str, Enum):
    INITIAL = "INITIAL"
    AWAITING_CHALLENGE = "AWAITING_CHALLENGE"
    AUTHENTICATED = "AUTHENTICATED"
    EXHAUSTED = "EXHAUSTED"


@dataclass(frozen=True)
class Challenge:
    realm: str
    nonce: str
    qop: str


def parse_challenge(header, status_code=None) -> Challenge:
    """
    Interpreta `Digest realm="...", nonce="...", qop=...`.
    Parámetros desconocidos se ignoran; qop puede venir con o sin comillas.
    """
    if not header:
        raise ChallengeParseError("Respuesta sin header WWW-Authenticate", header=header, status_code=status_code)
    scheme, _, params = header.strip().partition(" ")
    if scheme.lower() != "digest":
        raise ChallengeParseError(f"Esquema de autenticación no soportado: {scheme}", header=header, status_code=status_code)

    values = {}
    for name, quoted, bare in _CHALLENGE_PARAM.findall(params):
        values[name.lower()] = quoted if quoted else bare

    missing = [name for name in ("realm", "nonce", "qop") if not values.get(name)]
    if missing:
        raise ChallengeParseError(
            f"Desafío incompleto, faltan: {', '.join(missing)}", header=header, status_code=status_code
        )
    return Challenge(realm=values["realm"], nonce=values["nonce"], qop=values["qop"])


def log_audit(response):
    """Colaborador de auditoría por defecto: deja la respuesta cruda en el log."""
    logger.info(
        "[SINOPAC] Respuesta cruda status=%s headers=%s body=%s",
        response.status_code,
        dict(response.headers),
        response.text,
    )


class ChallengeResponseClient:
    """
    Una instancia = una sesión: llave elegida una vez, presupuesto de reintentos y último
    header Authorization son propios de la instancia. No compartir entre hilos.
    """

    HTTP_METHOD = "POST"
    CONTENT_TYPE = 'text/xml;charset="utf-8"'

    def __init__(
        self,
        config,
        keyring: KeyRing | None = None,
        *,
        audit=None,
        sleep=time.sleep,
        rng: random.Random | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
    ):
        self.config = config
        self.rng = rng or random.Random()
        self.keyring = keyring or KeyRing(config, rng=self.rng)
        self.key_num = self.keyring.select()
        self.credential = self.keyring.resolve(self.key_num)
        self.retries_left = config.max_retries if max_retries is None else max_retries
        self.backoff_seconds = config.retry_backoff if backoff_seconds is None else backoff_seconds
        self.authorization = ""
        self.audit = audit or log_audit
        self.sleep = sleep
        self.state = ClientState.INITIAL

    def _headers(self):
        return {
            "Content-Type": self.CONTENT_TYPE,
            "Authorization": self.authorization,
        }

    def _send(self, url, body):
        start = time.perf_counter()
        try:
            response = requests.post(
                url,
                data=body.encode("utf-8") if isinstance(body, str) else body,
                headers=self._headers(),
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as exc:
            gateway_attempts.labels(outcome="transport_error").inc()
            logger.warning("[SINOPAC-ALERT] Error de transporte %s %s: %s", self.HTTP_METHOD, url, exc)
            raise
        gateway_latency.labels(response.status_code).observe(time.perf_counter() - start)
        return response

    def _record(self, response):
        try:
            self.audit(response)
        except Exception:
            logger.exception("[SINOPAC-ALERT] Falló el registro de auditoría; se continúa con el protocolo")

    def _authorization_for(self, challenge, url, body):
        cnonce = digest.new_cnonce(self.rng)
        verifycode = digest.compute(
            self.credential.account_id,
            challenge.realm,
            self.credential.secret,
            challenge.nonce,
            cnonce,
            challenge.qop,
            self.HTTP_METHOD,
            url,
            digest.normalize_body(body),
        )
        return digest.build_authorization_header(
            realm=challenge.realm,
            nonce=challenge.nonce,
            uri=url,
            verifycode=verifycode,
            qop=challenge.qop,
            cnonce=cnonce,
        )

    def post(self, url, body):
        """
        Envía `body` hasta que el banco responda 200 o se agote el presupuesto.
        Cada respuesta pasa por el colaborador de auditoría antes de decidir el siguiente paso.
        """
        attempts = 0
        while True:
            self.state = ClientState.AWAITING_CHALLENGE
            attempts += 1
            response = self._send(url, body)
            self._record(response)

            if response.status_code == 200:
                gateway_attempts.labels(outcome="accepted").inc()
                self.state = ClientState.AUTHENTICATED
                logger.info("[SINOPAC] Petición aceptada tras %d intento(s) (KeyNum=%s)", attempts, self.key_num)
                return response

            gateway_attempts.labels(outcome="challenged").inc()
            # Sin presupuesto no hace falta un desafío: se agota aunque el header venga roto.
            if self.retries_left <= 0:
                self.state = ClientState.EXHAUSTED
                logger.error(
                    "[SINOPAC-ALERT] Reintentos agotados (status=%s, intentos=%d)", response.status_code, attempts
                )
                raise RetryBudgetExhausted(response.status_code, response.text, attempts)

            try:
                challenge = parse_challenge(
                    response.headers.get("WWW-Authenticate"), status_code=response.status_code
                )
            except ChallengeParseError:
                self.state = ClientState.EXHAUSTED
                logger.error(
                    "[SINOPAC-ALERT] Desafío ilegible (status=%s, intento %d)", response.status_code, attempts
                )
                raise

            self.retries_left -= 1
            self.authorization = self._authorization_for(challenge, url, body)
            logger.debug(
                "[SINOPAC] Desafío recibido (realm=%s), reintentando; quedan %d", challenge.realm, self.retries_left
            )
            self.sleep(self.backoff_seconds)
            self.state = ClientState.INITIAL
