# pasarela/urls.py
from django.urls import include, path

urlpatterns = [
    path('api/v1/sinopac/', include('sinopac.urls')),
]
