"""
URLs para el módulo sinopac.
"""
from django.urls import path

from .views import SinopacPushNotificationView, SinopacReturnView

urlpatterns = [
    path("notifications/push/", SinopacPushNotificationView.as_view(), name="sinopac-push"),
    path("notifications/return/", SinopacReturnView.as_view(), name="sinopac-return"),
]
