"""
Confirmaciones hacia SinoPac.

- Redirect: se reenvía el payload crudo al endpoint de confirmación y se espera
  exactamente AUTHORISED o DECLINED.
- Push: se responde en la misma petición HTTP con un XML que repite los datos del caso.
"""
import logging
import xml.etree.ElementTree as ET

import requests

from ..exceptions import AcknowledgmentProtocolError, ConfigurationError
from ..metrics import acknowledgments


logger = logging.getLogger(__name__)

AUTHORISED = "AUTHORISED"
DECLINED = "DECLINED"

PUSH_RESPONSE_ROOT = "CloseCaseResponse"
PUSH_ECHO_FIELDS = ("OrderID", "ShopNO", "TSNO", "Amount")
PUSH_SUCCESS_STATUS = "S"


class Acknowledger:
    USER_AGENT = "SinoPac Gateway Adapter"

    def __init__(self, config):
        self.config = config

    def acknowledge(self, raw_payload) -> bool:
        """
        Llamada única, sin reintentos. Sin SINOPAC_SSL_STRICT no se verifica el certificado.
        """
        if not self.config.confirmation_url:
            raise ConfigurationError("SINOPAC_CONFIRMATION_URL no configurada")
        payload = raw_payload.encode("utf-8") if isinstance(raw_payload, str) else raw_payload
        response = requests.post(
            self.config.confirmation_url,
            data=payload,
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Content-Length": str(len(payload)),
                "User-Agent": self.USER_AGENT,
            },
            timeout=self.config.request_timeout,
            verify=self.config.ssl_strict,
        )
        body = response.text
        if body not in (AUTHORISED, DECLINED):
            acknowledgments.labels(result="protocol_error").inc()
            logger.error("[SINOPAC-ALERT] Respuesta de confirmación inesperada: %r", body[:200])
            raise AcknowledgmentProtocolError(body)
        acknowledgments.labels(result=body.lower()).inc()
        return body == AUTHORISED


def build_push_acknowledgment(record) -> str:
    root = ET.Element(PUSH_RESPONSE_ROOT)
    for name in PUSH_ECHO_FIELDS:
        ET.SubElement(root, name).text = record.get(name) or ""
    ET.SubElement(root, "Status").text = PUSH_SUCCESS_STATUS
    return ET.tostring(root, encoding="unicode")
