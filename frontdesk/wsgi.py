"""
WSGI config for the frontdesk project.

Serves the HTTP API only; the display push channel needs the ASGI
application in ``frontdesk.asgi``.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'frontdesk.settings')

application = get_wsgi_application()
