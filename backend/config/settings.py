"""
Django settings for the Risk Data Visualizer backend.

Everything that differs between a laptop and a real deployment (secret key,
database credentials, upload folder) comes from environment variables, so
nothing sensitive has to live in this file.
"""
from pathlib import Path
import os

# Base directory for the backend project (../backend)
BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


# SECURITY WARNING: set RISKVIZ_SECRET_KEY in production!
SECRET_KEY = os.environ.get("RISKVIZ_SECRET_KEY", "dev-secret-key-change-me")

DEBUG = env_bool("RISKVIZ_DEBUG", "true")

ALLOWED_HOSTS: list[str] = [
    host.strip()
    for host in os.environ.get("RISKVIZ_ALLOWED_HOSTS", "*").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Third‑party apps
    "rest_framework",
    "corsheaders",             # the desktop/web clients live on other origins

    # Local apps
    "riskdata",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    # CORS middleware should come before CommonMiddleware
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# SQLite by default; point the RISKVIZ_DB_* variables at MySQL/Postgres for
# anything shared. Credentials are never written here.
DATABASES = {
    "default": {
        "ENGINE": os.environ.get("RISKVIZ_DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("RISKVIZ_DB_NAME", str(BASE_DIR / "db.sqlite3")),
        "USER": os.environ.get("RISKVIZ_DB_USER", ""),
        "PASSWORD": os.environ.get("RISKVIZ_DB_PASSWORD", ""),
        "HOST": os.environ.get("RISKVIZ_DB_HOST", ""),
        "PORT": os.environ.get("RISKVIZ_DB_PORT", ""),
    }
}

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "static"

# Uploaded CSVs are spooled here while they are parsed and removed afterwards.
UPLOAD_DIR = Path(os.environ.get("RISKVIZ_UPLOAD_DIR", str(BASE_DIR / "uploads")))

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

CORS_ALLOW_ALL_ORIGINS = env_bool("RISKVIZ_CORS_ALLOW_ALL", "true")

# The ingestion API is open: no login is needed to upload or read rows.
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
}

LOG_LEVEL = os.environ.get("RISKVIZ_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "riskdata": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": True,
        },
        "config": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": True,
        },
    },
}
