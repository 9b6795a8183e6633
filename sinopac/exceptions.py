"""
Errores de la integración con SinoPac.

Solo la falta de configuración, los desafíos ilegibles, el agotamiento de reintentos
y las notificaciones malformadas llegan al llamador; las respuestas 401 con un
desafío válido son pasos normales del protocolo y el cliente las consume.
"""
from django.core.exceptions import ImproperlyConfigured


class SinopacError(Exception):
    """Base de los errores de SinoPac."""
    pass


class ConfigurationError(SinopacError, ImproperlyConfigured):
    """Falta una llave o variable requerida; es fatal y no se reintenta."""
    pass


class ChallengeParseError(SinopacError):
    """El header WWW-Authenticate del banco no trae un desafío utilizable."""

    def __init__(self, message, *, header=None, status_code=None):
        super().__init__(message)
        self.header = header
        self.status_code = status_code


class RetryBudgetExhausted(SinopacError):
    """El banco nunca aceptó el verifycode dentro del número de intentos permitido."""

    def __init__(self, status_code, body, attempts):
        super().__init__(
            f"Expected response to be a <200>, but was <{status_code}> after {attempts} attempts"
        )
        self.status_code = status_code
        self.body = body
        self.attempts = attempts


class NotificationFormatError(SinopacError):
    """La notificación entrante no es XML válido ni un formulario url-encoded válido."""
    pass


class AcknowledgmentProtocolError(SinopacError):
    """El endpoint de confirmación respondió algo distinto de AUTHORISED / DECLINED."""

    def __init__(self, body):
        super().__init__(f"Faulty Sinopac result: {body}")
        self.body = body
