"""
Django settings for the hrops project.

Every value can be overridden from the environment (HROPS_* variables);
defaults are meant for local development and the test suite.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "y", "on")


SECRET_KEY = os.environ.get("HROPS_SECRET_KEY", "dev-insecure-change-me")
DEBUG = _env_bool("HROPS_DEBUG", True)
ALLOWED_HOSTS = [h for h in os.environ.get("HROPS_ALLOWED_HOSTS", "*").split(",") if h]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "approvals",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "hrops.urls"
WSGI_APPLICATION = "hrops.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

# SQLite by default; point HROPS_DB_ENGINE at postgresql for row-level locking in production
DATABASES = {
    "default": {
        "ENGINE": os.environ.get("HROPS_DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("HROPS_DB_NAME", str(BASE_DIR / "db.sqlite3")),
        "USER": os.environ.get("HROPS_DB_USER", ""),
        "PASSWORD": os.environ.get("HROPS_DB_PASSWORD", ""),
        "HOST": os.environ.get("HROPS_DB_HOST", ""),
        "PORT": os.environ.get("HROPS_DB_PORT", ""),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("HROPS_TIME_ZONE", "Asia/Seoul")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

REST_FRAMEWORK = {
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "HR Ops Approval API",
    "DESCRIPTION": "Vacation / expense / rental approval workflow and alarms",
    "VERSION": "1.0.0",
}

# ---- Approval engine
APPROVAL_ALARM_READ_RETENTION_DAYS = int(os.environ.get("APPROVAL_ALARM_READ_RETENTION_DAYS", "3"))
APPROVAL_PENDING_MAX_PAGE_SIZE = int(os.environ.get("APPROVAL_PENDING_MAX_PAGE_SIZE", "200"))

# ---- Outbound alarm delivery (after commit, best effort)
APPROVAL_NOTIFY_EMAIL = _env_bool("APPROVAL_NOTIFY_EMAIL", False)
APPROVAL_NOTIFY_LARK = _env_bool("APPROVAL_NOTIFY_LARK", False)
LARK_APPROVAL_WEBHOOK_URL = os.environ.get("LARK_APPROVAL_WEBHOOK_URL", "")
LARK_TIMEOUT = float(os.environ.get("LARK_TIMEOUT", "8"))

EMAIL_BACKEND = os.environ.get("HROPS_EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend")
EMAIL_HOST = os.environ.get("HROPS_EMAIL_HOST", "localhost")
EMAIL_PORT = int(os.environ.get("HROPS_EMAIL_PORT", "25"))
DEFAULT_FROM_EMAIL = os.environ.get("HROPS_DEFAULT_FROM_EMAIL", "")
EMAIL_SUBJECT_PREFIX = os.environ.get("HROPS_EMAIL_SUBJECT_PREFIX", "[HR Ops] ")

# ---- Logging
APPROVAL_LOG_LEVEL = os.environ.get("APPROVAL_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "approvals": {
            "handlers": ["console"],
            "level": APPROVAL_LOG_LEVEL,
            "propagate": False,
        },
    },
}
