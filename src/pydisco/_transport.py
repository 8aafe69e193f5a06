"""HTTP transport for the REST API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import quote

import aiohttp

from pydisco._redact import redact_for_log
from pydisco.config import DiscoConfig
from pydisco.exceptions import (
    DiscoApiError,
    DiscoNotFoundError,
    DiscoRateLimitError,
    DiscoTransportError,
)

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`RestTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Any = None,
        params: Mapping[str, str] | None = None,
        reason: str | None = None,
    ) -> Any:
        ...


def _raise_for_status(endpoint: str, status: int, body: Any, text: str) -> None:
    """Map a non-2xx response onto the exception hierarchy."""
    code = ""
    message = text[:200]
    if isinstance(body, dict):
        code = str(body.get("code", ""))
        message = str(body.get("message", message))

    if status == 429:
        retry_after: float | None = None
        if isinstance(body, dict) and body.get("retry_after") is not None:
            try:
                retry_after = float(body["retry_after"])
            except (TypeError, ValueError):
                retry_after = None
        raise DiscoRateLimitError(
            f"{endpoint} rate limited (retry_after={retry_after})",
            retry_after=retry_after,
            code=code,
            endpoint=endpoint,
        )
    if status == 404:
        raise DiscoNotFoundError(
            f"{endpoint} not found: code={code} message={message}",
            code=code,
            endpoint=endpoint,
            status_code=status,
        )
    if isinstance(body, dict) and "code" in body:
        raise DiscoApiError(
            f"{endpoint} failed: code={code} message={message}",
            code=code,
            endpoint=endpoint,
            status_code=status,
        )
    raise DiscoTransportError(
        f"HTTP {status} from {endpoint}: {text[:200]}",
        status_code=status,
        endpoint=endpoint,
    )


class RestTransport:
    """aiohttp-backed transport that authenticates and decodes JSON."""

    def __init__(self, config: DiscoConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self, reason: str | None) -> dict[str, str]:
        headers: dict[str, str] = {
            "authorization": self._config.authorization,
            "user-agent": self._config.user_agent,
        }
        if reason:
            headers["x-audit-log-reason"] = quote(reason, safe=" ")
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Any = None,
        params: Mapping[str, str] | None = None,
        reason: str | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns ``None`` for empty (204) responses. Raises
        :class:`DiscoApiError` subclasses for API error bodies and
        :class:`DiscoTransportError` for everything else that went wrong.
        """
        url = f"{self._config.base_url}{endpoint}"
        headers = self._headers(reason)

        _logger.debug("%s %s", method, url)
        if self._config.api_trace_enabled:
            _logger.debug(
                "request %s %s headers=%s params=%s body=%s",
                method,
                endpoint,
                redact_for_log(headers),
                redact_for_log(params),
                redact_for_log(json_body),
            )

        try:
            async with self._http.request(
                method,
                url,
                json=json_body,
                params=dict(params) if params else None,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise DiscoTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except TimeoutError as exc:
            raise DiscoTransportError(
                f"Request to {endpoint} timed out",
                endpoint=endpoint,
            ) from exc

        body: Any = None
        if text:
            try:
                body = json.loads(text)
            except json.JSONDecodeError as exc:
                if 200 <= status < 300:
                    raise DiscoTransportError(
                        f"Invalid JSON from {endpoint}: {text[:200]}",
                        status_code=status,
                        endpoint=endpoint,
                    ) from exc

        if self._config.api_trace_enabled:
            _logger.debug("response %s %s status=%d body=%s", method, endpoint, status, redact_for_log(body))

        if not 200 <= status < 300:
            _raise_for_status(endpoint, status, body, text)
        return body
