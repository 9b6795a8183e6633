"""
Veredicto de pago completado.

El redirect trae Status explícito; el push trae fecha de pago y bandera de reembolso
y no llena Status de la misma forma. Ambos cuentan como pagado.
"""

STATUS_FIELD = "Status"
PAY_DATE_FIELD = "PayDate"
REFUND_FLAG_FIELD = "RefundFlag"
TEST_FIELD = "Param3"

STATUS_SUCCESS = "S"
NOT_REFUNDED = "N"


def is_complete(record) -> bool:
    # TODO: confirmar la regla PayDate + RefundFlag con la documentación del push de SinoPac
    if record.get(STATUS_FIELD) == STATUS_SUCCESS:
        return True
    return bool(record.get(PAY_DATE_FIELD)) and record.get(REFUND_FLAG_FIELD) == NOT_REFUNDED


def is_test(record) -> bool:
    return record.get(TEST_FIELD) == "test"
