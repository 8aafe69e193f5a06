from __future__ import annotations

from typing import Any

import pytest

from pydisco._transport import RestTransport, _raise_for_status
from pydisco.config import DiscoConfig
from pydisco.exceptions import (
    DiscoApiError,
    DiscoNotFoundError,
    DiscoRateLimitError,
    DiscoTransportError,
)


def test_rate_limit_maps_to_rate_limit_error() -> None:
    with pytest.raises(DiscoRateLimitError) as exc_info:
        _raise_for_status("/x", 429, {"message": "slow down", "retry_after": "1.5"}, "")
    assert exc_info.value.retry_after == 1.5
    assert exc_info.value.status_code == 429
    assert exc_info.value.endpoint == "/x"


def test_rate_limit_with_bad_retry_after() -> None:
    with pytest.raises(DiscoRateLimitError) as exc_info:
        _raise_for_status("/x", 429, {"retry_after": "soon"}, "")
    assert exc_info.value.retry_after is None


def test_not_found_maps_to_not_found_error() -> None:
    with pytest.raises(DiscoNotFoundError) as exc_info:
        _raise_for_status("/x", 404, {"code": 10070, "message": "Unknown Guild Scheduled Event"}, "")
    assert exc_info.value.code == "10070"
    assert isinstance(exc_info.value, DiscoApiError)


def test_error_body_maps_to_api_error() -> None:
    with pytest.raises(DiscoApiError) as exc_info:
        _raise_for_status("/x", 400, {"code": 50035, "message": "Invalid Form Body"}, "")
    assert type(exc_info.value) is DiscoApiError
    assert exc_info.value.status_code == 400
    assert "Invalid Form Body" in str(exc_info.value)


def test_other_failures_map_to_transport_error() -> None:
    with pytest.raises(DiscoTransportError) as exc_info:
        _raise_for_status("/x", 502, None, "<html>bad gateway</html>")
    assert exc_info.value.status_code == 502


def test_headers_carry_token_and_quoted_reason() -> None:
    transport = RestTransport(DiscoConfig(token="abc"), http_session=_unused_session())

    headers = transport._headers("spam wave – 2/3")

    assert headers["authorization"] == "Bot abc"
    assert headers["x-audit-log-reason"] == "spam wave %E2%80%93 2%2F3"
    assert "x-audit-log-reason" not in transport._headers(None)


def _unused_session() -> Any:
    return object()
