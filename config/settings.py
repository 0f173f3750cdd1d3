"""
Django settings for the rental listings API.

Every value is read with python-decouple, from the environment or a .env file.
"""

from pathlib import Path

import cloudinary
from decouple import Csv, config

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = config('SECRET_KEY', default='django-insecure-dev-key')
DEBUG = config('DEBUG', default=False, cast=bool)
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())


# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    'rest_framework',

    'jobs',
    'listings',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'


# Database
# Submission locks the draft row with select_for_update. SQLite has no row
# locks, so use PostgreSQL in production (DB_ENGINE=django.db.backends.postgresql).

DATABASES = {
    'default': {
        'ENGINE': config('DB_ENGINE', default='django.db.backends.sqlite3'),
        'NAME': config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        'USER': config('DB_USER', default=''),
        'PASSWORD': config('DB_PASSWORD', default=''),
        'HOST': config('DB_HOST', default=''),
        'PORT': config('DB_PORT', default=''),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
]

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# Django REST Framework

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'accounts.authentication.JWTAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.MultiPartParser',
        'rest_framework.parsers.FormParser',
    ],
    'EXCEPTION_HANDLER': 'core.exceptions.api_exception_handler',
}

JWT_SECRET_KEY = config('JWT_SECRET_KEY', default=SECRET_KEY)
JWT_ALGORITHM = config('JWT_ALGORITHM', default='HS256')


# Listing applications

FRONTEND_URL = config('FRONTEND_URL', default='http://localhost:3000')
SUPPORTED_LOCALES = config('SUPPORTED_LOCALES', default='en,nl,bg,el', cast=Csv())
TERMS_REQUIRED_DOMAINS = config(
    'TERMS_REQUIRED_DOMAINS',
    default='localhost,127.0.0.1,domakin.nl,www.domakin.nl,demo.domakin.nl',
    cast=Csv(),
)
LISTING_IMAGE_MAX_BYTES = config('LISTING_IMAGE_MAX_BYTES', default=5 * 1024 * 1024, cast=int)


# Cloudinary (listing images)

CLOUDINARY_CLOUD_NAME = config('CLOUDINARY_CLOUD_NAME', default='')
CLOUDINARY_API_KEY = config('CLOUDINARY_API_KEY', default='')
CLOUDINARY_API_SECRET = config('CLOUDINARY_API_SECRET', default='')

cloudinary.config(
    cloud_name=CLOUDINARY_CLOUD_NAME,
    api_key=CLOUDINARY_API_KEY,
    api_secret=CLOUDINARY_API_SECRET,
    secure=True,
)


# External services

OPENAI_API_KEY = config('OPENAI_API_KEY', default='')
OPENAI_MODEL = config('OPENAI_MODEL', default='gpt-4o-mini')
OPENAI_TIMEOUT = config('OPENAI_TIMEOUT', default=60, cast=int)

STRIPE_SECRET_KEY = config('STRIPE_SECRET_KEY', default='')
STRIPE_CURRENCY = config('STRIPE_CURRENCY', default='eur')
PAYMENT_TIMEOUT = config('PAYMENT_TIMEOUT', default=30, cast=int)

GITHUB_API_TOKEN = config('GITHUB_API_TOKEN', default='')
GITHUB_WEBHOOK_TOKEN = config('GITHUB_WEBHOOK_TOKEN', default='')
GITHUB_SITEMAP_OWNER = config('GITHUB_SITEMAP_OWNER', default='')
GITHUB_SITEMAP_REPO = config('GITHUB_SITEMAP_REPO', default='')
GITHUB_TIMEOUT = config('GITHUB_TIMEOUT', default=30, cast=int)


# Celery

CELERY_BROKER_URL = config('CELERY_BROKER_URL', default='redis://localhost:6379/0')
CELERY_RESULT_BACKEND = config('CELERY_RESULT_BACKEND', default='redis://localhost:6379/0')
CELERY_TASK_ALWAYS_EAGER = config('CELERY_TASK_ALWAYS_EAGER', default=False, cast=bool)
CELERY_TASK_EAGER_PROPAGATES = config('CELERY_TASK_EAGER_PROPAGATES', default=False, cast=bool)
CELERY_TASK_ACKS_LATE = True
# Publishing gives up quickly when the broker is down so requests are not held
CELERY_BROKER_CONNECTION_TIMEOUT = config('CELERY_BROKER_CONNECTION_TIMEOUT', default=3, cast=int)
CELERY_TASK_PUBLISH_RETRY_POLICY = {
    'max_retries': config('CELERY_PUBLISH_MAX_RETRIES', default=2, cast=int),
    'interval_start': 0,
    'interval_step': 0.5,
    'interval_max': 1,
}
CELERY_REDIS_SOCKET_CONNECT_TIMEOUT = 3
CELERY_REDIS_SOCKET_TIMEOUT = 5
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'
CELERY_TIMEZONE = TIME_ZONE


# Logging

LOG_LEVEL = config('LOG_LEVEL', default='INFO').upper()
LOG_FORMAT = config('LOG_FORMAT', default='json').lower()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'json': {
            '()': 'pythonjsonlogger.json.JsonFormatter',
            'fmt': '%(asctime)s %(levelname)s %(name)s %(message)s',
            'rename_fields': {'asctime': 'timestamp', 'levelname': 'level'},
        },
        'plain': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'json' if LOG_FORMAT == 'json' else 'plain',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {'handlers': ['console'], 'level': 'WARNING', 'propagate': False},
        'urllib3': {'level': 'WARNING'},
        'celery': {'level': 'INFO'},
    },
}
