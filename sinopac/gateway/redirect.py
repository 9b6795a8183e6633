"""
Firma del formulario de redirección a la página de pago con tarjeta.
"""
import hashlib

from .keyring import KeyRing


DEFAULT_CURRENCY = "NTD"


def build_redirect_digest(order_no, shop_no, amount, secret) -> str:
    """SHA256("POST:<OrderNO>:<ShopNO>:<Amount>:<llave>")"""
    if isinstance(secret, bytes):
        secret = secret.decode("utf-8")
    raw_data = f"POST:{order_no}:{shop_no}:{amount}:{secret}"
    return hashlib.sha256(raw_data.encode("utf-8")).hexdigest()


def build_redirect_fields(config, order_no, amount_minor, keyring: KeyRing | None = None, **extra):
    """
    Arma los campos del POST a `config.redirect_url`. El monto va en centésimas.
    """
    keyring = keyring or KeyRing(config)
    key_num = keyring.select()
    credential = keyring.resolve(key_num)
    fields = {
        "ShopNO": credential.account_id,
        "KeyNum": str(key_num),
        "OrderNO": order_no,
        "Amount": str(amount_minor),
        "CurrencyID": DEFAULT_CURRENCY,
    }
    fields.update({key: str(value) for key, value in extra.items()})
    fields["Digest"] = build_redirect_digest(order_no, credential.account_id, fields["Amount"], credential.secret)
    return fields
