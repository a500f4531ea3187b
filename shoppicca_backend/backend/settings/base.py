"""
PATH: backend/settings/base.py

BASE SETTINGS (shared by dev + prod)

Covers:
- Tenant routing (APP_URL -> root domain, reserved subdomains, excluded paths)
- Throttling for public storefront endpoints
- Payments (Paystack) + messaging (Arkesel SMS)
- Media storage for uploaded images
- Sentry (optional): error visibility in production
"""

from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path

import environ
from corsheaders.defaults import default_headers, default_methods

# -----------------------------------------
# BASE DIRECTORY
# -----------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# -----------------------------------------
# TEST MODE DETECTION
# -----------------------------------------
TESTING = "test" in sys.argv or "pytest" in sys.modules

# -----------------------------------------
# ENV (django-environ)
# -----------------------------------------
env = environ.Env(
    DEBUG=(bool, True),
    SECRET_KEY=(str, ""),
    TIME_ZONE=(str, "UTC"),
    LOG_LEVEL=(str, "INFO"),
    ALLOWED_HOSTS=(list, ["localhost", ".localhost", "127.0.0.1"]),
    CORS_ALLOWED_ORIGINS=(list, ["http://localhost:3000"]),
    CSRF_TRUSTED_ORIGINS=(list, ["http://localhost:3000"]),
    DATABASE_URL=(str, f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
    # Public URL of the platform; its host is the tenant root domain
    APP_URL=(str, "http://localhost:3000"),
    TENANCY_DEFAULT_ROOT_DOMAIN=(str, "shoppicca.vercel.app"),
    TENANCY_RESERVED_SUBDOMAINS=(list, ["www", "shoppicca"]),
    PAYSTACK_SECRET_KEY=(str, ""),
    PAYSTACK_PUBLIC_KEY=(str, ""),
    ARKESEL_API_KEY=(str, ""),
    ARKESEL_SENDER_ID=(str, "ForgeOne"),
    CONTACT_SMS_RECIPIENT=(str, "233249497164"),
    # Throttling
    THROTTLE_ANON_RATE=(str, "60/min"),
    THROTTLE_USER_RATE=(str, "600/min"),
    THROTTLE_PUBLIC_WRITE_RATE=(str, "10/min"),
    THROTTLE_PUBLIC_CATALOG_RATE=(str, "120/min"),
    # Media (uploaded images)
    MEDIA_URL=(str, "/media/"),
    MEDIA_ROOT=(str, str(BASE_DIR / "media")),
    # Sentry (optional; enable by setting SENTRY_DSN)
    SENTRY_DSN=(str, ""),
    SENTRY_ENVIRONMENT=(str, "development"),
    SENTRY_TRACES_SAMPLE_RATE=(float, 0.0),
    SENTRY_SEND_PII=(bool, False),
)

# -----------------------------------------
# LOAD .env
# -----------------------------------------
env_file_1 = BASE_DIR / ".env"
env_file_2 = BASE_DIR.parent / ".env"

if env_file_1.exists():
    env.read_env(str(env_file_1))
elif env_file_2.exists():
    env.read_env(str(env_file_2))

# -----------------------------------------
# CORE SECURITY
# -----------------------------------------
SECRET_KEY = (env("SECRET_KEY") or "dev-insecure-change-me").strip()
DEBUG = env.bool("DEBUG")
ALLOWED_HOSTS = env.list("ALLOWED_HOSTS")

# -----------------------------------------
# I18N / TZ
# -----------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = (env("TIME_ZONE") or "UTC").strip()
USE_I18N = True
USE_TZ = True

# -----------------------------------------
# AUTH USER MODEL (custom)
# -----------------------------------------
AUTH_USER_MODEL = "users.User"

AUTHENTICATION_BACKENDS = [
    "users.auth_backends.EmailBackend",
]

# -----------------------------------------
# INSTALLED APPS
# -----------------------------------------
INSTALLED_APPS = [
    "corsheaders",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "rest_framework_simplejwt",
    "drf_spectacular",
    "django_filters",
    "users.apps.UsersConfig",
    "tenancy.apps.TenancyConfig",
    "store.apps.StoreConfig",
    "products.apps.ProductsConfig",
    "billing.apps.BillingConfig",
    "public.apps.PublicConfig",
]

# -----------------------------------------
# MIDDLEWARE
# -----------------------------------------
# TenantRewriteMiddleware must run after SessionMiddleware (it refreshes the
# session on platform requests) and before CommonMiddleware (it rewrites the
# path that URL resolution sees).
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "tenancy.middleware.TenantRewriteMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "backend.urls"
WSGI_APPLICATION = "backend.wsgi.application"
APPEND_SLASH = True

# -----------------------------------------
# TEMPLATES (required for Django admin)
# -----------------------------------------
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [str(BASE_DIR / "templates")],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

# -----------------------------------------
# REST FRAMEWORK
# -----------------------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.IsAuthenticated",),
    "DEFAULT_FILTER_BACKENDS": (
        "django_filters.rest_framework.DjangoFilterBackend",
        "rest_framework.filters.SearchFilter",
        "rest_framework.filters.OrderingFilter",
    ),
    "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
    "PAGE_SIZE": 50,
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_THROTTLE_CLASSES": (
        "rest_framework.throttling.AnonRateThrottle",
        "rest_framework.throttling.UserRateThrottle",
    ),
    "DEFAULT_THROTTLE_RATES": {
        "anon": env("THROTTLE_ANON_RATE"),
        "user": env("THROTTLE_USER_RATE"),
        "public_write": env("THROTTLE_PUBLIC_WRITE_RATE"),
        "public_catalog": env("THROTTLE_PUBLIC_CATALOG_RATE"),
    },
}

# -----------------------------------------
# SIMPLE JWT
# -----------------------------------------
SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=30),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=1),
    "ROTATE_REFRESH_TOKENS": True,
}

# -----------------------------------------
# SESSIONS (platform admin)
# -----------------------------------------
SESSION_COOKIE_AGE = 60 * 60 * 24 * 7

# -----------------------------------------
# DATABASE
# -----------------------------------------
DATABASES = {
    "default": env.db("DATABASE_URL"),
}

# -----------------------------------------
# TENANT ROUTING
# -----------------------------------------
# APP_URL is parsed once at startup; its host is the root domain that tenant
# subdomains hang off. An unparseable value falls back to the default literal.
APP_URL = (env("APP_URL") or "").strip()
TENANCY_DEFAULT_ROOT_DOMAIN = (env("TENANCY_DEFAULT_ROOT_DOMAIN") or "").strip()
TENANCY_RESERVED_SUBDOMAINS = env.list("TENANCY_RESERVED_SUBDOMAINS")
TENANCY_SESSION_REFRESHER = "tenancy.session.refresh_session"
TENANCY_EXCLUDED_PATHS = [
    r"^/static/",
    r"^/media/",
    r"^/favicon\.ico$",
    r".*\.(?:svg|png|jpg|jpeg|gif|webp)$",
]

# -----------------------------------------
# PAYMENTS
# -----------------------------------------
PAYMENTS = {
    "PAYSTACK": {
        "PUBLIC_KEY": (env("PAYSTACK_PUBLIC_KEY") or "").strip(),
        "SECRET_KEY": (env("PAYSTACK_SECRET_KEY") or "").strip(),
        "CURRENCY": "GHS",
    }
}

# Paid onboarding subscriptions run for this many days
SUBSCRIPTION_PERIOD_DAYS = 30

# -----------------------------------------
# MESSAGING (contact form SMS relay)
# -----------------------------------------
MESSAGING = {
    "ARKESEL": {
        "API_KEY": (env("ARKESEL_API_KEY") or "").strip(),
        "SENDER_ID": (env("ARKESEL_SENDER_ID") or "").strip(),
        "DEFAULT_RECIPIENT": (env("CONTACT_SMS_RECIPIENT") or "").strip(),
    }
}

# -----------------------------------------
# LOGGING
# -----------------------------------------
LOG_LEVEL = (env("LOG_LEVEL") or "INFO").strip().upper()

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
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
        "tenancy": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "store": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "products": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "billing": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "public": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "users": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}

# -----------------------------------------
# SENTRY (optional)
# -----------------------------------------
SENTRY_DSN = (env("SENTRY_DSN") or "").strip()
SENTRY_ENVIRONMENT = (env("SENTRY_ENVIRONMENT") or "development").strip()
SENTRY_TRACES_SAMPLE_RATE = float(env("SENTRY_TRACES_SAMPLE_RATE"))
SENTRY_SEND_PII = env.bool("SENTRY_SEND_PII")

if SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        environment=SENTRY_ENVIRONMENT,
        integrations=[DjangoIntegration()],
        traces_sample_rate=SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=SENTRY_SEND_PII,
    )

# -----------------------------------------
# CORS / CSRF
# -----------------------------------------
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS")
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = list(default_methods)
CORS_ALLOW_HEADERS = list(default_headers)

CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS")

# -----------------------------------------
# STATIC + MEDIA FILES
# -----------------------------------------
STATIC_URL = "static/"
MEDIA_URL = (env("MEDIA_URL") or "/media/").strip()
MEDIA_ROOT = (env("MEDIA_ROOT") or str(BASE_DIR / "media")).strip()
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -----------------------------------------
# SWAGGER
# -----------------------------------------
SPECTACULAR_SETTINGS = {
    "TITLE": "Shoppicca API",
    "DESCRIPTION": "Storefront builder: onboarding, catalog admin, public storefronts",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
}
