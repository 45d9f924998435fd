"""
WSGI config for the homestore project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'homestore.config.settings')

application = get_wsgi_application()
