"""
WSGI config for the wallet identity service.

It exposes the WSGI callable as a module-level variable named ``application``.
DJANGO_ENV selects the settings module (see config.env.django_settings_module).
"""

import os

from django.core.wsgi import get_wsgi_application

from config.env import django_settings_module

os.environ.setdefault("DJANGO_SETTINGS_MODULE", django_settings_module(os.environ))

application = get_wsgi_application()
