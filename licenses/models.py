"""
Model registry entry point for the licenses app.

Django discovers models through ``<app>.models``; the model itself lives
in the infrastructure layer.
"""
from licenses.infrastructure.models import ActivationCode  # noqa: F401
