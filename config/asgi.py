"""
ASGI config for the wallet identity service.

It exposes the ASGI callable as a module-level variable named ``application``.
"""

import os

from django.core.asgi import get_asgi_application

from config.env import django_settings_module

os.environ.setdefault("DJANGO_SETTINGS_MODULE", django_settings_module(os.environ))

application = get_asgi_application()
