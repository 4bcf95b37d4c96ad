"""
App configuration for the Niyyah activation service.
"""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class NiyyahServiceConfig(AppConfig):
    """App configuration for NiyyahService."""

    name = "NiyyahService"
    verbose_name = "Niyyah Activation Service"

    def ready(self):
        """Called when Django starts."""
        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry

        setup_opentelemetry()
        register_event_handlers()
        logger.debug("Observability setup complete")
