"""
WSGI config for the ERP project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'erp_control.settings')

application = get_wsgi_application()
