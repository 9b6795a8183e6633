"""
Notificaciones de pago de SinoPac.

Exporta:
- SinopacNotification: fachada sobre un payload entrante (push XML o redirect)
- parse, NotificationRecord, PayloadFormat: normalización del payload
- is_complete, is_test: veredictos
- Acknowledger, build_push_acknowledgment: confirmaciones
"""
from .acknowledgment import Acknowledger, build_push_acknowledgment
from .completion import is_complete, is_test
from .parser import NotificationRecord, PayloadFormat, detect_format, parse


class SinopacNotification:
    """
    Ejemplo:

        notify = SinopacNotification(request.body, config)
        if notify.acknowledge():
            ... procesar orden ... if notify.complete
        else:
            ... registrar posible intento de fraude ...
    """

    def __init__(self, raw, config, acknowledger: Acknowledger | None = None):
        self.config = config
        self.record = parse(raw)
        self.acknowledger = acknowledger or Acknowledger(config)

    @property
    def raw(self):
        return self.record.raw

    @property
    def format(self):
        return self.record.format

    @property
    def item_id(self):
        return self.record.get("OrderNO")

    @property
    def transaction_id(self):
        return self.record.get("TSNO")

    @property
    def shop_no(self):
        return self.record.get("ShopNO")

    @property
    def received_at(self):
        return self.record.get("PayDate")

    @property
    def gross(self):
        return self.record.get("Amount")

    @property
    def payer_email(self):
        return self.record.get("PayerEmail")

    @property
    def receiver_email(self):
        return self.record.get("ReceiverEmail")

    @property
    def status(self):
        return self.record.get("Status")

    @property
    def complete(self):
        return is_complete(self.record)

    @property
    def test(self):
        return is_test(self.record)

    def acknowledge(self):
        return self.acknowledger.acknowledge(self.raw)

    def push_acknowledgment(self):
        return build_push_acknowledgment(self.record)


__all__ = [
    "Acknowledger",
    "NotificationRecord",
    "PayloadFormat",
    "SinopacNotification",
    "build_push_acknowledgment",
    "detect_format",
    "is_complete",
    "is_test",
    "parse",
]
