"""Phone lookup provider configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

PHONE_LOOKUP_BASE_URL = "https://api.telnyx.com/v2/"
PHONE_LOOKUP_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True)
class PhoneLookupConfig:
    """Holds phone lookup provider configuration values."""

    api_key: str
    resilience: ResilienceConfig


def get_phone_lookup_config(*, resilience: ResilienceConfig | None = None) -> PhoneLookupConfig:
    values = require_env_vars(("PHONE_LOOKUP_API_KEY",))
    base_url = os.getenv("PHONE_LOOKUP_BASE_URL") or PHONE_LOOKUP_BASE_URL
    return PhoneLookupConfig(
        api_key=values["PHONE_LOOKUP_API_KEY"],
        resilience=resilience
        or ResilienceConfig(
            name="phone-lookup",
            base_url=base_url,
            timeout_seconds=PHONE_LOOKUP_TIMEOUT_SECONDS,
            # rate limits and timeouts are handled by the validator, not the transport
            retry=RetryPolicy(total=0),
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        ),
    )
