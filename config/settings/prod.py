# config/settings/prod.py
from .base import *  # noqa

DEBUG = False
ALLOWED_HOSTS = [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if h]

CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = [
    "https://console.hie.kwarastate.gov.ng",
]
CORS_ALLOW_CREDENTIALS = True

SIMPLE_JWT["AUTH_COOKIE_SECURE"] = True
SIMPLE_JWT["AUTH_COOKIE_SAMESITE"] = "Lax"  # keep Lax if same-site via subdomain strategy

# Query cache versions must be shared by every worker. Create the table with
# `manage.py createcachetable`, or point the backend at Redis/Memcached.
CACHES = {
    "default": {
        "BACKEND": os.getenv("DJANGO_CACHE_BACKEND", "django.core.cache.backends.db.DatabaseCache"),
        "LOCATION": os.getenv("DJANGO_CACHE_LOCATION", "hie_query_cache"),
    }
}

configure_structlog(json_logs=True)
