"""
Django settings for the VOD backend.

- Auto ENV selection via ENV_FILE (.env.dev / .env.prod)
- Auto DB selection → DEBUG=True or no DB_NAME → SQLite, otherwise PostgreSQL
- SimpleJWT access tokens backed by an in-process session registry
- RQ worker + Redis config with auto-switch (localhost ↔ redis)
- Media on local disk or S3 (USE_S3_MEDIA)
"""

import os
from pathlib import Path
from datetime import timedelta
import environ

BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env()
env_file = os.getenv("ENV_FILE", ".env.dev")

if not os.path.isabs(env_file):
    env_file = os.path.join(BASE_DIR, env_file)

if os.path.exists(env_file):
    environ.Env.read_env(env_file)

DEBUG = env.bool("DEBUG", default=False)
SECRET_KEY = env.str("SECRET_KEY", default="dev-secret")

ALLOWED_HOSTS = env.list(
    "ALLOWED_HOSTS",
    default=["localhost", "127.0.0.1", "testserver"]
)

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    "rest_framework",
    "corsheaders",
    "django_rq",
    "import_export",

    "users_app",
    "content_app",
]

if DEBUG:
    INSTALLED_APPS.append("debug_toolbar")


AUTH_USER_MODEL = "users_app.UserProfile"

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

if DEBUG:
    MIDDLEWARE.insert(1, "debug_toolbar.middleware.DebugToolbarMiddleware")

INTERNAL_IPS = ["127.0.0.1"]


ROOT_URLCONF = "vod_backend_app.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
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

WSGI_APPLICATION = "vod_backend_app.wsgi.application"

DB_SSL_REQUIRE = env.bool("DB_SSL_REQUIRE", default=False)
DB_SSL_ROOTCERT = env.str("DB_SSL_ROOTCERT", default="")

USE_SQLITE_LOCAL = env.bool(
    "USE_SQLITE_LOCAL",
    default=DEBUG or not env.str("DB_NAME", default=""),
)

if USE_SQLITE_LOCAL:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }
else:
    options = {}
    if DB_SSL_REQUIRE:
        options["sslmode"] = "require"
        if DB_SSL_ROOTCERT:
            options["sslrootcert"] = DB_SSL_ROOTCERT

    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": env("DB_NAME"),
            "USER": env("DB_USER"),
            "PASSWORD": env("DB_PASSWORD"),
            "HOST": env("DB_HOST"),
            "PORT": env.int("DB_PORT", default=5432),
            "OPTIONS": options,
        }
    }


REDIS_URL = env.str("REDIS_URL", default="")

if REDIS_URL:
    RQ_QUEUES = {"default": {"URL": REDIS_URL, "DEFAULT_TIMEOUT": 360}}
else:
    RQ_QUEUES = {
        "default": {
            "HOST": env("REDIS_HOST", default=("localhost" if DEBUG else "redis")),
            "PORT": env.int("REDIS_PORT", default=6379),
            "DB": env.int("REDIS_DB", default=0),
            "DEFAULT_TIMEOUT": 360,
        }
    }


CACHES = {
    "default": {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": env(
            "REDIS_LOCATION",
            default=(
                "redis://localhost:6379/0" if DEBUG else "redis://redis:6379/0"),
        ),
        "OPTIONS": {"CLIENT_CLASS": "django_redis.client.DefaultClient"},
        "KEY_PREFIX": "vod",
    }
}

STATIC_URL = "/static/"
STATIC_ROOT = os.path.join(BASE_DIR, "staticfiles")

MEDIA_URL = "/media/"
MEDIA_ROOT = os.path.join(BASE_DIR, "uploads")

# -----------------------------
# Storage: S3 vs Local
# -----------------------------
USE_S3_MEDIA = env.bool("USE_S3_MEDIA", default=False)

# Absolute origin prepended to local media URLs
BACKEND_ORIGIN = env("BACKEND_ORIGIN", default="http://127.0.0.1:8000")

if USE_S3_MEDIA:
    INSTALLED_APPS.append("storages")
    AWS_ACCESS_KEY_ID = env("AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY = env("AWS_SECRET_ACCESS_KEY")
    AWS_STORAGE_BUCKET_NAME = env("AWS_STORAGE_BUCKET_NAME")
    AWS_S3_REGION_NAME = env("AWS_S3_REGION_NAME", default="eu-central-1")

    AWS_DEFAULT_ACL = None
    AWS_S3_FILE_OVERWRITE = False
    AWS_S3_SIGNATURE_VERSION = "s3v4"
    AWS_S3_QUERYSTRING_AUTH = env.bool(
        "AWS_S3_QUERYSTRING_AUTH", default=False)

    MEDIA_URL = f"https://{AWS_STORAGE_BUCKET_NAME}.s3.{AWS_S3_REGION_NAME}.amazonaws.com/"

STORAGES = {
    "default": {
        "BACKEND": (
            "storages.backends.s3boto3.S3Boto3Storage"
            if USE_S3_MEDIA
            else "django.core.files.storage.FileSystemStorage"
        ),
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}


REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "users_app.api.authentication.AdminJWTAuthentication",
        "users_app.api.authentication.SessionJWTAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_THROTTLE_CLASSES": [
        "rest_framework.throttling.AnonRateThrottle",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "anon": env.str("ANON_THROTTLE_RATE", default="30/min"),
    },
}

CORS_ALLOWED_ORIGINS = env.list(
    "CORS_ALLOWED_ORIGINS",
    default=["http://localhost:4200", "http://127.0.0.1:4200"]
)
CORS_ALLOW_CREDENTIALS = env.bool("CORS_ALLOW_CREDENTIALS", default=True)

CSRF_TRUSTED_ORIGINS = env.list(
    "CSRF_TRUSTED_ORIGINS",
    default=["http://localhost:4200", "http://127.0.0.1:4200"]
)

EMAIL_BACKEND = env(
    "EMAIL_BACKEND", default="django.core.mail.backends.console.EmailBackend")
EMAIL_HOST = env("EMAIL_HOST", default="smtp.gmail.com")
EMAIL_PORT = env.int("EMAIL_PORT", default=587)
EMAIL_USE_TLS = env.bool("EMAIL_USE_TLS", default=True)
EMAIL_HOST_USER = env("EMAIL_HOST_USER", default="")
EMAIL_HOST_PASSWORD = env("EMAIL_HOST_PASSWORD", default="")
DEFAULT_FROM_EMAIL = env("DEFAULT_FROM_EMAIL", default=EMAIL_HOST_USER)

# -----------------------------
# Sessions (single active token per user)
# -----------------------------
JWT_ACCESS_COOKIE_NAME = env("JWT_ACCESS_COOKIE_NAME", default="vod_access")
JWT_COOKIE_SAMESITE = env("JWT_COOKIE_SAMESITE", default="Lax")
JWT_COOKIE_SECURE = env.bool("JWT_COOKIE_SECURE", default=not DEBUG)

# Clamped to 1..24 hours.
SESSION_TOKEN_LIFETIME = timedelta(
    hours=min(max(env.int("SESSION_TOKEN_LIFETIME_HOURS", default=24), 1), 24)
)
ADMIN_TOKEN_LIFETIME = timedelta(
    hours=min(max(env.int("ADMIN_TOKEN_LIFETIME_HOURS", default=1), 1), 24)
)
SESSION_STORE_CLASS = env.str(
    "SESSION_STORE_CLASS", default="users_app.sessions.InMemorySessionStore"
)

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": SESSION_TOKEN_LIFETIME,
    "SIGNING_KEY": SECRET_KEY,
    "AUTH_HEADER_TYPES": ("Bearer",),
    "UPDATE_LAST_LOGIN": False,
}

# Pending registrations live in the cache for this many seconds.
REGISTRATION_CODE_TTL = env.int("REGISTRATION_CODE_TTL", default=15 * 60)

# -----------------------------
# Content graph
# -----------------------------
VIDEO_ALLOW_ROOT_CATEGORY = env.bool("VIDEO_ALLOW_ROOT_CATEGORY", default=False)
CATEGORY_TREE_MAX_DEPTH = env.int("CATEGORY_TREE_MAX_DEPTH", default=32)
STATS_RECENT_LIMIT = env.int("STATS_RECENT_LIMIT", default=5)
FEATURED_CATEGORY_NAME = env.str("FEATURED_CATEGORY_NAME", default="films")

# -----------------------------
# Logging
# -----------------------------
LOG_LEVEL = env.str("LOG_LEVEL", default="DEBUG" if DEBUG else "INFO")

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
        "users_app": {"handlers": ["console"], "level": LOG_LEVEL},
        "content_app": {"handlers": ["console"], "level": LOG_LEVEL},
    },
}

if DEBUG:
    SESSION_COOKIE_SECURE = False
    CSRF_COOKIE_SECURE = False
else:
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_SSL_REDIRECT = env.bool("SECURE_SSL_REDIRECT", default=False)
    SECURE_HSTS_SECONDS = 31536000
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True
