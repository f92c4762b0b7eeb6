"""Test settings.

In-memory SQLite database and eager Celery so tasks run inline.
"""

from .base import *  # noqa: F401,F403
from .base import LOGGING

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

TIME_ZONE = 'UTC'

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

for name in ('apps', 'shared', 'bookings.audit'):
    LOGGING['loggers'][name]['level'] = 'WARNING'
