from django.apps import AppConfig


class SinopacConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sinopac"
    verbose_name = "SinoPac"

    def ready(self):
        """
        Valida variables críticas de SinoPac en entornos no DEBUG para evitar despliegues incorrectos.
        """
        from django.conf import settings
        from django.core.exceptions import ImproperlyConfigured

        if getattr(settings, "DEBUG", False):
            return

        required_vars = [
            "SINOPAC_ACCOUNT",
            "SINOPAC_API_KEY_DATA1",
            "SINOPAC_API_KEY_DATA2",
            "SINOPAC_API_KEY_DATA3",
            "SINOPAC_MODE",
            "SINOPAC_CONFIRMATION_URL",
        ]
        missing = [var for var in required_vars if not getattr(settings, var, None)]
        if missing:
            raise ImproperlyConfigured(f"Faltan variables SinoPac: {', '.join(missing)}")
