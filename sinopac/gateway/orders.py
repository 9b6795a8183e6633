"""
Creación de órdenes de transferencia (cuenta virtual ATM / ibon).
"""
import logging
import unicodedata
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from decimal import Decimal

from django.utils import timezone

from .client import ChallengeResponseClient
from ..notifications.parser import xml_fields


logger = logging.getLogger(__name__)

CONTRACT_NAMESPACE = "http://schemas.datacontract.org/2004/07/SinoPacWebAPI.Contract"
PAY_TYPE_ATM = "A"
PRODUCT_NAME_MAX = 60
EXPIRE_DAYS = 3


@dataclass(frozen=True)
class AtmOrder:
    order_no: str
    amount: Decimal
    currency: str
    product_names: tuple = ()
    payer_email: str = ""
    receiver_email: str = ""
    params: tuple = field(default=("", "", ""))


def _truncate(text, limit, omission="..."):
    if len(text) <= limit:
        return text
    return text[: limit - len(omission)] + omission


def clean_product_name(names):
    """
    El banco rechaza comillas, porcentajes y similares: se quitan controles,
    puntuación, espacios y símbolos antes de truncar a 60 caracteres.
    """
    joined = "和".join(str(name) for name in names)
    cleaned = "".join(
        char for char in joined if unicodedata.category(char)[0] not in ("C", "P", "Z", "S")
    )
    return _truncate(cleaned, PRODUCT_NAME_MAX)


def to_minor_units(amount) -> int:
    # 100 representa 1 unidad de moneda
    return int(Decimal(str(amount)) * 100)


def build_atm_order_envelope(order: AtmOrder, shop_no: str, key_num: int, expire_on: date | None = None) -> str:
    expire_on = expire_on or (timezone.localdate() + timedelta(days=EXPIRE_DAYS))
    params = tuple(order.params) + ("",) * (3 - len(order.params))

    root = ET.Element("ATMOrIBonClientRequest", {"xmlns": CONTRACT_NAMESPACE})
    children = [
        ("ShopNO", shop_no),
        ("KeyNum", key_num),
        ("OrderNO", order.order_no),
        ("Amount", to_minor_units(order.amount)),
        ("CurrencyID", order.currency),
        ("ExpireDate", expire_on.strftime("%Y%m%d")),
        ("PayType", PAY_TYPE_ATM),
        ("PrdtName", clean_product_name(order.product_names)),
        ("PayerEmail", order.payer_email),
        ("ReceiverEmail", order.receiver_email),
        ("Param1", params[0]),
        ("Param2", params[1]),
        ("Param3", params[2]),
    ]
    for tag, value in children:
        ET.SubElement(root, tag).text = "" if value is None else str(value)
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="unicode")


@dataclass(frozen=True)
class GatewayReply:
    status_code: int
    body: str
    fields: dict


class SinopacGateway:
    """
    Fachada de órdenes contra la API XML. Cada instancia abre su propia sesión
    (una llave elegida y su presupuesto de reintentos).
    """

    def __init__(self, config, client: ChallengeResponseClient | None = None, **client_options):
        self.config = config
        self.client = client or ChallengeResponseClient(config, **client_options)

    def create_atm_or_ibon_trans(self, order: AtmOrder, expire_on: date | None = None) -> GatewayReply:
        params = tuple(order.params) + ("",) * (3 - len(order.params))
        if not params[2]:
            # Param3 lleva el modo de integración; la notificación lo devuelve para marcar pruebas.
            order = replace(order, params=params[:2] + (self.config.mode,) + params[3:])
        envelope = build_atm_order_envelope(
            order,
            shop_no=self.config.account,
            key_num=self.client.key_num,
            expire_on=expire_on,
        )
        logger.info("[SINOPAC] Creando orden ATM/ibon %s (test=%s)", order.order_no, self.config.is_test)
        response = self.client.post(self.config.order_url, envelope)
        fields = {}
        if response.text.strip():
            try:
                # Status S: procesado, F: error del banco
                fields = xml_fields(response.text)
            except ET.ParseError as exc:
                logger.error(
                    "[SINOPAC-ALERT] Respuesta no XML al crear la orden %s (HTTP %s): %s",
                    order.order_no,
                    response.status_code,
                    exc,
                )
        return GatewayReply(status_code=response.status_code, body=response.text, fields=fields)

    def purchase(self, money, payment, options=None):
        raise NotImplementedError("SinoPac no expone compra directa en esta integración")

    def authorize(self, money, payment, options=None):
        raise NotImplementedError("SinoPac no expone autorización en esta integración")

    def capture(self, money, authorization, options=None):
        raise NotImplementedError("SinoPac no expone captura en esta integración")

    def refund(self, money, authorization, options=None):
        raise NotImplementedError("SinoPac no expone reembolsos en esta integración")

    def void(self, authorization, options=None):
        raise NotImplementedError("SinoPac no expone anulaciones en esta integración")
