"""
WSGI config for the bloodlink project.

Exposes the WSGI callable as a module-level variable named ``application``.
WebSocket broadcast needs the ASGI entrypoint in ``bloodlink.asgi``; this
one serves plain HTTP only.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'bloodlink.settings')

application = get_wsgi_application()
