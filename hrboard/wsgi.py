"""
WSGI config for hrboard project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hrboard.settings')

application = get_wsgi_application()
