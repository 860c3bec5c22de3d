# okr_planner/settings.py
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'dev-only-not-secret')
DEBUG = os.environ.get('DJANGO_DEBUG', '1') == '1'
ALLOWED_HOSTS = []

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'apps.okrs',
]

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {},
    },
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

# Silnik postępu liczy wszystko w UTC
USE_TZ = True
TIME_ZONE = 'UTC'

# Ustawienia silnika postępu OKR
OKR_PROGRESS = {
    # check_ins / tasks / mixed - gdy KR nie ma własnego KrConfig
    'DEFAULT_TRACKING_SOURCE': os.environ.get('OKR_DEFAULT_TRACKING_SOURCE', 'check_ins'),
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {'class': 'logging.StreamHandler'},
    },
    'loggers': {
        'apps.okrs': {
            'handlers': ['console'],
            'level': os.environ.get('OKR_LOG_LEVEL', 'INFO'),
        },
    },
}
