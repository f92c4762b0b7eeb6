"""Development settings for the screen marketplace.

This module extends the base settings with development specific
configuration, such as enabling debug and human-readable console logs.
Do not use these settings in production!
"""

import structlog

from .base import *  # noqa: F401,F403
from .base import LOGGING

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Colored key/value output instead of JSON lines
LOGGING['formatters']['json']['processor'] = structlog.dev.ConsoleRenderer()
LOGGING['loggers']['apps']['level'] = 'DEBUG'
