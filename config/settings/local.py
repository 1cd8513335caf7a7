# config/settings/local.py
from .base import *  # noqa

DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"

HIE_CONSOLE["ALLOW_MOH_SELF_SIGNUP"] = os.getenv("HIE_ALLOW_MOH_SELF_SIGNUP", "1") == "1"
