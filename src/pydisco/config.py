"""Client configuration for pydisco."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pydisco._constants import BASE_URL, CDN_URL, IMAGE_FORMATS, IMAGE_SIZE_MAX, USER_AGENT, _is_valid_size
from pydisco.exceptions import DiscoConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class DiscoConfig:
    """Client configuration.

    Parameters
    ----------
    token : str
        Bot token, sent as ``Authorization: Bot <token>``.
    base_url : str
        REST API base URL including the version segment.
    cdn_url : str
        Base URL used by the derived image accessors.
    user_agent : str
        ``User-Agent`` header sent with every request.
    default_image_format : str
        Format used when an image accessor is called without a valid one.
    default_image_size : int
        Size used when an image accessor is called without a valid one.
        Must be a power of two between 16 and 4096.
    request_timeout : float
        Total timeout in seconds for a single REST request.
    api_trace_enabled : bool
        Log redacted request/response bodies at DEBUG level.
    """

    token: str
    base_url: str = BASE_URL
    cdn_url: str = CDN_URL
    user_agent: str = USER_AGENT
    default_image_format: str = "jpg"
    default_image_size: int = IMAGE_SIZE_MAX
    request_timeout: float = 15.0
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.token or not self.token.strip():
            raise DiscoConfigError("token must be non-empty")
        if self.default_image_format not in IMAGE_FORMATS:
            raise DiscoConfigError(f"default_image_format must be one of {IMAGE_FORMATS}")
        if not _is_valid_size(self.default_image_size):
            raise DiscoConfigError("default_image_size must be a power of two between 16 and 4096")

    @property
    def authorization(self) -> str:
        token = self.token.strip()
        if token.startswith(("Bot ", "Bearer ")):
            return token
        return f"Bot {token}"

    @classmethod
    def from_env(cls, **overrides: Any) -> DiscoConfig:
        """Create configuration from environment variables.

        Reads ``DISCO_TOKEN`` and optional ``DISCO_*`` variables.
        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "DISCO_TOKEN": "token",
            "DISCO_BASE_URL": "base_url",
            "DISCO_CDN_URL": "cdn_url",
            "DISCO_USER_AGENT": "user_agent",
            "DISCO_DEFAULT_IMAGE_FORMAT": "default_image_format",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        size_env = env.get("DISCO_DEFAULT_IMAGE_SIZE")
        if size_env is not None and "default_image_size" not in overrides:
            config_kwargs["default_image_size"] = int(size_env)

        timeout_env = env.get("DISCO_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = float(timeout_env)

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(env.get("DISCO_API_TRACE_ENABLED"), False)

        config_kwargs.update(overrides)

        if "token" not in config_kwargs:
            raise DiscoConfigError("DISCO_TOKEN is not set")
        return cls(**config_kwargs)
