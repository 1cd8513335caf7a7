# hie_core/common/tests/test_logging.py
from hie_core.common.logging import REDACTED, redact_sensitive


def test_secrets_are_redacted():
    event = {"event": "registration_approved", "temporary_password": "abc", "password": "x", "request_id": 3}
    out = redact_sensitive(None, "info", event)
    assert out["temporary_password"] == REDACTED
    assert out["password"] == REDACTED
    assert out["request_id"] == 3
