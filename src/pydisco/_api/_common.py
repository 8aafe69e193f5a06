"""Shared helpers for REST endpoint modules.

This module centralizes the most repeated patterns:
- building a route from a template and ids
- checking the shape of a decoded response body

It is internal to pydisco and may change at any time.
"""

from __future__ import annotations

from typing import Any

from pydisco.exceptions import DiscoApiError


def build_route(template: str, **ids: Any) -> str:
    """Fill a route template; ids are sent as opaque strings."""
    return template.format(**{key: str(value) for key, value in ids.items()})


def expect_object(endpoint: str, decoded: Any) -> dict[str, Any]:
    if not isinstance(decoded, dict):
        raise DiscoApiError(
            f"{endpoint} returned {type(decoded).__name__}, expected an object",
            code="invalid_body",
            endpoint=endpoint,
        )
    return decoded


def expect_list(endpoint: str, decoded: Any) -> list[dict[str, Any]]:
    if not isinstance(decoded, list):
        raise DiscoApiError(
            f"{endpoint} returned {type(decoded).__name__}, expected a list",
            code="invalid_body",
            endpoint=endpoint,
        )
    return [item for item in decoded if isinstance(item, dict)]
