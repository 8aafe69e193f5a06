from __future__ import annotations

from pydisco._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "authorization": "Bot abc",
        "name": "rule",
        "nested": {"token": "t", "Password": "pw"},
    }

    redacted = redact_for_log(payload)
    assert redacted["authorization"] == "<redacted>"
    assert redacted["name"] == "rule"
    assert redacted["nested"]["token"] == "<redacted>"
    assert redacted["nested"]["Password"] == "<redacted>"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_collapses_data_uris() -> None:
    image = "data:image/png;base64," + "A" * 100
    assert redact_for_log({"image": image}) == {"image": f"<data-uri:{len(image)}>"}


def test_redact_for_log_walks_lists() -> None:
    assert redact_for_log([{"token": "t"}, 1, None]) == [{"token": "<redacted>"}, 1, None]
