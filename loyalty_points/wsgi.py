"""
WSGI config for the Loyalty Points project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'loyalty_points.settings')

application = get_wsgi_application()
