"""
WSGI config for InstanceLicenseService.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "InstanceLicenseService.settings.prod")

application = get_wsgi_application()
