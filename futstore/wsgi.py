"""
WSGI config para o projeto FutStore.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'futstore.settings')

application = get_wsgi_application()
