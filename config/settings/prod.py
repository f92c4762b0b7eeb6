"""Production settings for the screen marketplace.

This module extends the base settings with production specific
configuration. Ensure that sensitive values (secret key, database,
Celery broker) are provided via environment variables.
"""

import os

from django.core.exceptions import ImproperlyConfigured  # type: ignore

from .base import *  # noqa: F401,F403
from .base import DATABASES

# Never run with debug enabled in production
DEBUG = False

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', '').split(',')

if os.environ.get('DJANGO_SECRET_KEY') is None:
    raise ImproperlyConfigured("DJANGO_SECRET_KEY must be set in production")

# Booking creation relies on SELECT FOR UPDATE of the screen row
if DATABASES['default']['ENGINE'] == 'django.db.backends.sqlite3':
    raise ImproperlyConfigured("Production requires a database with row-level locking (e.g. PostgreSQL)")
