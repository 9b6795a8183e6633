"""
Cálculo del verifycode de SinoPac.

Es un esquema tipo HTTP Digest con SHA256:

    ha1 = SHA256("<account>:<realm>:<secret>")
    ha2 = SHA256("<method>:<uri>")
    verifycode = SHA256("<ha1>:<nonce>:<cnonce>:<qop>:<body compacto>:<ha2>")

El banco calcula el hash sobre el XML sin espacios ni saltos de línea, aunque el
documento viaje indentado.
"""
import hashlib
import re


# Mismo conjunto que \s en el banco: solo blancos ASCII.
_WHITESPACE = re.compile(r"[ \t\r\n\f\v]")

CNONCE_RANGE = (123400, 9999999)


def _as_bytes(value) -> bytes:
    if isinstance(value, bytes):
        return value
    return str(value).encode("utf-8")


def _sha256(*parts) -> str:
    return hashlib.sha256(b":".join(_as_bytes(part) for part in parts)).hexdigest()


def normalize_body(body) -> str:
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return _WHITESPACE.sub("", body)


def new_cnonce(rng) -> int:
    return rng.randint(*CNONCE_RANGE)


def compute(account_id, realm, secret, nonce, cnonce, qop, http_method, request_uri, normalized_body) -> str:
    ha1 = _sha256(account_id, realm, secret)
    ha2 = _sha256(http_method, request_uri)
    return _sha256(ha1, nonce, cnonce, qop, normalized_body, ha2)


def build_authorization_header(realm, nonce, uri, verifycode, qop, cnonce) -> str:
    return (
        f'Digest realm="{realm}", nonce="{nonce}", uri="{uri}", '
        f'verifycode="{verifycode}", qop={qop}, cnonce="{cnonce}"'
    )
