"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

urlpatterns = [
    path(
        "codes",
        views.CreateActivationCodeView.as_view(),
        name="create-activation-code",
    ),
]
