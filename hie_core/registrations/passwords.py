# hie_core/registrations/passwords.py
from __future__ import annotations

import secrets
import string

from django.conf import settings

# no look-alike characters (0/O, 1/l/I) since the password is read out by hand
ALPHABET = "".join(c for c in string.ascii_letters + string.digits if c not in "0O1lI")


def temporary_password_length() -> int:
    return int(settings.HIE_CONSOLE.get("TEMP_PASSWORD_LENGTH", 12))


def generate_temporary_password(length: int | None = None) -> str:
    n = length or temporary_password_length()
    return "".join(secrets.choice(ALPHABET) for _ in range(n))
