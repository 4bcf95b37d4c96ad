"""
Wiring for the activation client.
"""
from typing import Optional

import requests

from client.application.session import ActivationSession
from client.config import ClientSettings
from client.infrastructure.file_cache import JsonFileActivationCache
from client.infrastructure.fingerprint import FingerprintProvider
from client.infrastructure.http_gateway import HttpActivationGateway


def create_session(
    settings: Optional[ClientSettings] = None,
    http_session: Optional[requests.Session] = None,
) -> ActivationSession:
    """
    Build an ActivationSession from settings.

    Args:
        settings: Client settings (default: read from the environment)
        http_session: ``requests.Session`` for the gateway

    Returns:
        Ready-to-start ActivationSession
    """
    settings = settings or ClientSettings.from_env()
    return ActivationSession(
        gateway=HttpActivationGateway(
            settings.api_url,
            timeout=settings.request_timeout,
            session=http_session,
        ),
        cache=JsonFileActivationCache(settings.cache_path),
        fingerprints=FingerprintProvider(),
    )
