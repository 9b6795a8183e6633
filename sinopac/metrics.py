from core.metrics import get_counter, get_histogram


gateway_attempts = get_counter(
    "sinopac_gateway_attempts_total",
    "Intentos contra la API XML de SinoPac por resultado",
    ["outcome"],
)
gateway_latency = get_histogram(
    "sinopac_gateway_latency_seconds",
    "Latencia de cada intento contra SinoPac",
    ["status"],
)
notifications_received = get_counter(
    "sinopac_notifications_total",
    "Notificaciones de pago recibidas de SinoPac",
    ["format", "complete"],
)
acknowledgments = get_counter(
    "sinopac_acknowledgments_total",
    "Confirmaciones enviadas al endpoint de SinoPac",
    ["result"],
)
