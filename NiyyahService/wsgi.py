"""
WSGI config for NiyyahService project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "NiyyahService.settings.prod")

application = get_wsgi_application()
