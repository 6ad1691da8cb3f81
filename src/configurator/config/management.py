"""Management interface configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, optional_float_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ManagementConfig:
    resilience: ResilienceConfig


def get_management_config() -> ManagementConfig:
    base_url = require_env_vars(("CONFIGURATOR_MANAGEMENT_URL",))["CONFIGURATOR_MANAGEMENT_URL"]
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError(
            f"CONFIGURATOR_MANAGEMENT_URL must be an http(s) URL, got {base_url!r}"
        )
    token = optional_env_var("CONFIGURATOR_MANAGEMENT_TOKEN")
    timeout = optional_float_env_var("CONFIGURATOR_MANAGEMENT_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)

    headers = {"Accept": "application/json"}
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"

    resilience = ResilienceConfig(
        name="management",
        base_url=base_url.rstrip("/"),
        timeout_seconds=timeout,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        retry=RetryPolicy(total=3),
        default_headers=headers,
    )
    return ManagementConfig(resilience=resilience)
