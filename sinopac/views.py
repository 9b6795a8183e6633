"""
Views de notificaciones de SinoPac.

POST /api/v1/sinopac/notifications/push/    push servidor a servidor (responde XML)
POST /api/v1/sinopac/notifications/return/  redirect del navegador (confirma y responde JSON)
"""
import logging

import requests
from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from sinopac.config import GatewaySettings
from sinopac.exceptions import AcknowledgmentProtocolError, NotificationFormatError
from sinopac.metrics import notifications_received
from sinopac.notifications import SinopacNotification
from sinopac.signals import payment_notified


logger = logging.getLogger(__name__)


class _NotificationView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def _build_notification(self, request):
        # request.body antes que request.data: el acuse debe reenviar el payload tal cual llegó.
        notification = SinopacNotification(request.body, GatewaySettings.from_settings())
        notifications_received.labels(
            format=notification.format.value,
            complete=str(notification.complete).lower(),
        ).inc()
        return notification

    def _notify(self, notification):
        payment_notified.send(
            sender=self.__class__,
            notification=notification,
            complete=notification.complete,
            test=notification.test,
        )


class SinopacPushNotificationView(_NotificationView):
    def post(self, request, *args, **kwargs):
        try:
            notification = self._build_notification(request)
        except NotificationFormatError as e:
            logger.error("[SINOPAC-ALERT] Push con formato inválido: %s", e)
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        logger.info(
            "[SINOPAC] Push recibido order=%s tsno=%s complete=%s",
            notification.item_id,
            notification.transaction_id,
            notification.complete,
        )
        self._notify(notification)
        return HttpResponse(
            notification.push_acknowledgment(),
            content_type='text/xml; charset="utf-8"',
            status=status.HTTP_200_OK,
        )


class SinopacReturnView(_NotificationView):
    def post(self, request, *args, **kwargs):
        try:
            notification = self._build_notification(request)
            acknowledged = notification.acknowledge()
        except NotificationFormatError as e:
            logger.error("[SINOPAC-ALERT] Redirect con formato inválido: %s", e)
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except (AcknowledgmentProtocolError, requests.RequestException) as e:
            logger.error("[SINOPAC-ALERT] No se pudo confirmar la notificación: %s", e)
            return Response(
                {"error": "No se pudo confirmar la notificación con SinoPac."},
                status=status.HTTP_502_BAD_GATEWAY,
            )

        if not acknowledged:
            logger.warning(
                "[SINOPAC-ALERT] SinoPac rechazó la notificación de la orden %s; posible falsificación",
                notification.item_id,
            )
        else:
            self._notify(notification)

        return Response(
            {
                "status": notification.status,
                "order_no": notification.item_id,
                "complete": acknowledged and notification.complete,
                "acknowledged": acknowledged,
            },
            status=status.HTTP_200_OK,
        )
