# config/settings/test.py
from .base import *  # noqa

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "hie-console-tests",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

HIE_CONSOLE["ALLOW_MOH_SELF_SIGNUP"] = True
# No waiting between profile lookups under test.
HIE_CONSOLE["PROFILE_RESOLUTION"] = {"MAX_ATTEMPTS": 5, "BASE_DELAY": 0.0, "BACKOFF": 2.0}
