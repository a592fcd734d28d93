from __future__ import annotations

from shapex._redact import redact_for_log


def test_redact_for_log_redacts_configured_keys() -> None:
    payload = {
        "counter": 1,
        "session": {"userId": "123", "token": "SECRET"},
        "Password": "pw",
    }

    redacted = redact_for_log(payload, redact_keys=frozenset({"token", "password"}))
    assert redacted["counter"] == 1
    assert redacted["session"]["userId"] == "123"
    assert redacted["session"]["token"] == "<redacted>"
    assert redacted["Password"] == "<redacted>"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_caps_long_sequences() -> None:
    redacted = redact_for_log(list(range(60)))
    assert redacted[:3] == [0, 1, 2]
    assert redacted[-1] == "<10 more>"


def test_redact_for_log_handles_argument_tuples() -> None:
    assert redact_for_log((5, b"abc", None)) == [5, "<bytes:3b>", None]
