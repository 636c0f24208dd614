"""Django settings for the events service.

Every deployment-specific value is read from the environment.
"""

from pathlib import Path

from events_api.config import get_django_settings, get_events_settings

BASE_DIR = Path(__file__).resolve().parent.parent

_django = get_django_settings()
_events = get_events_settings()

SECRET_KEY = _django.secret_key
DEBUG = _django.debug
ALLOWED_HOSTS = _django.host_list

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "events",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "events_api.urls"
WSGI_APPLICATION = "events_api.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": _django.database_path or str(BASE_DIR / "db.sqlite3"),
        "OPTIONS": {
            "transaction_mode": "IMMEDIATE",
            "timeout": _django.database_timeout,
        },
        "TEST": {"NAME": str(BASE_DIR / "test_db.sqlite3")},
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "events.handlers.authentication.HeaderActorAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "EXCEPTION_HANDLER": "events.handlers.errors.events_exception_handler",
    "UNAUTHENTICATED_USER": None,
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
}

# Events engine
EVENTS_STORE_BACKEND = _events.store_backend
EVENTS_REMINDER_WINDOW_HOURS = _events.reminder_window_hours
EVENTS_DEFAULT_PAGE_SIZE = _events.default_page_size
EVENTS_MAX_PAGE_SIZE = _events.max_page_size

# structlog is configured in EventsConfig.ready()
LOGGING_CONFIG = None
