"""
Core Infra - Logging Filters.

Sanitización de secretos del banco y datos personales antes de emitir logs.
"""
import logging
import re


class SanitizeSecretsFilter(logging.Filter):
    """
    Filtro de logging que remueve llaves de SinoPac y otra información sensible.

    Las respuestas crudas del banco y los headers Digest se registran para auditoría,
    así que este filtro debe ir en todos los handlers que los reciban.

    Patrones detectados:
    - SINOPAC_API_KEY_DATA1..3 en formato clave=valor
    - verifycode y cnonce dentro de un header Digest
    - Emails de pagador / receptor
    """

    REDACTED = "***REDACTED***"

    PATTERNS = [
        (
            re.compile(r'(SINOPAC_API_KEY_DATA\d["\']?\s*[:=]\s*["\']?)([^\s"\',]+)'),
            r'\1***REDACTED***'
        ),
        (
            re.compile(r'(verifycode=")([0-9a-fA-F]+)(")'),
            r'\1***REDACTED***\3'
        ),
        (
            re.compile(r'(cnonce=")(\d+)(")'),
            r'\1***REDACTED***\3'
        ),
        (
            re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'),
            '***EMAIL***'
        ),
    ]

    def _sanitize(self, value):
        if not isinstance(value, str):
            return value
        for pattern, replacement in self.PATTERNS:
            value = pattern.sub(replacement, value)
        return value

    def filter(self, record):
        """Sanitiza el mensaje y sus argumentos; nunca descarta el registro."""
        record.msg = self._sanitize(record.msg)
        if isinstance(record.args, dict):
            record.args = {key: self._sanitize(value) for key, value in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(self._sanitize(arg) for arg in record.args)
        return True
