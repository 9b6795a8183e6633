"""
Normalización de notificaciones de pago entrantes.

SinoPac avisa de dos formas:
- push servidor a servidor: documento XML `CloseCaseRequest`
- redirección del navegador: formulario url-encoded (OrderNO=...&Status=...)

Ambas se reducen a un único NotificationRecord. El formato se decide antes de
parsear; un error de parseo nunca se usa para elegir el otro camino.
"""
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from urllib.parse import parse_qsl

from ..exceptions import NotificationFormatError


KNOWN_ROOTS = frozenset({"CloseCaseRequest"})

# Cada par se copia en ambos sentidos al parsear.
FIELD_ALIASES = (
    ("OrderNO", "OrderID"),
)

# BOM de UTF-8 y blancos que algunos clientes anteponen al documento.
_LEADING = "\ufeff \t\r\n"


class PayloadFormat(str, Enum):
    XML = "xml"
    FORM = "form"


def _local_name(tag):
    return tag.rsplit("}", 1)[-1]


def xml_fields(document) -> dict:
    """Aplana las hojas de un documento XML en {tag sin namespace: texto}."""
    root = ET.fromstring(document)
    return {
        _local_name(element.tag): (element.text or "").strip()
        for element in root.iter()
        if len(element) == 0 and element is not root
    }


def detect_format(raw) -> PayloadFormat:
    if raw.lstrip(_LEADING).startswith("<"):
        return PayloadFormat.XML
    return PayloadFormat.FORM


def _parse_xml(raw):
    try:
        root = ET.fromstring(raw)
    except ET.ParseError as exc:
        raise NotificationFormatError(f"XML de notificación inválido: {exc}") from exc
    if _local_name(root.tag) not in KNOWN_ROOTS:
        raise NotificationFormatError(f"Raíz XML desconocida: {_local_name(root.tag)}")
    return xml_fields(raw)


def _parse_form(raw):
    """
    Segmentos sin clave o sin "=" se aceptan como en cualquier formulario url-encoded;
    solo se rechaza un cuerpo del que no sale ningún par clave=valor.
    """
    text = raw.strip()
    if not any(segment.partition("=")[0] and "=" in segment for segment in text.split("&")):
        raise NotificationFormatError(f"Formulario sin pares clave=valor: {text[:40]}")
    return {key: value for key, value in parse_qsl(text, keep_blank_values=True) if key}


def _apply_aliases(fields):
    for first, second in FIELD_ALIASES:
        if first in fields and second not in fields:
            fields[second] = fields[first]
        elif second in fields and first not in fields:
            fields[first] = fields[second]
    return fields


@dataclass(frozen=True)
class NotificationRecord(Mapping):
    format: PayloadFormat
    fields: Mapping
    raw: str

    def __getitem__(self, key):
        return self.fields[key]

    def __iter__(self):
        return iter(self.fields)

    def __len__(self):
        return len(self.fields)

    def get(self, key, default=None):
        # Un campo vacío ("") es distinto de un campo ausente (None).
        return self.fields.get(key, default)


def parse(raw) -> NotificationRecord:
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise NotificationFormatError("La notificación no está en UTF-8") from exc
    if not raw or not raw.strip():
        raise NotificationFormatError("Notificación vacía")

    text = raw.lstrip(_LEADING)
    payload_format = detect_format(text)
    if payload_format is PayloadFormat.XML:
        fields = _parse_xml(text)
    else:
        fields = _parse_form(text)
    return NotificationRecord(
        format=payload_format,
        fields=MappingProxyType(_apply_aliases(fields)),
        raw=raw,
    )
