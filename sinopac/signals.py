from django.dispatch import Signal

# Argumentos: notification (SinopacNotification), complete (bool), test (bool).
# Quien persista órdenes se conecta aquí; la app no guarda nada por su cuenta.
payment_notified = Signal()
