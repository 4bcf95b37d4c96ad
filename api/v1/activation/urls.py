"""
URL configuration for activation API endpoints.
"""

from django.urls import path

from api.v1.activation import views

urlpatterns = [
    path(
        "activate",
        views.ActivateView.as_view(),
        name="activate",
    ),
    path(
        "check-device",
        views.CheckDeviceView.as_view(),
        name="check-device",
    ),
]
