"""
Django settings for the automata_site project.

Only the automata app is installed; the simulator keeps no data in the
database, so the sqlite database exists solely for Django's test runner.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-automata-dev-key')

DEBUG = os.environ.get('DJANGO_DEBUG', 'false').lower() in ('1', 'true', 'yes')

ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',')

INSTALLED_APPS = [
    'automata.apps.AutomataConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'automata_site.urls'

WSGI_APPLICATION = 'automata_site.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Simulator settings
AUTOMATA_MAX_INPUT_LENGTH = int(os.environ.get('AUTOMATA_MAX_INPUT_LENGTH', 1000))
AUTOMATA_DEFAULT_KIND = os.environ.get('AUTOMATA_DEFAULT_KIND', 'nfa')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'automata': {
            'handlers': ['console'],
            'level': os.environ.get('AUTOMATA_LOG_LEVEL', 'WARNING'),
            'propagate': False,
        },
    },
}
