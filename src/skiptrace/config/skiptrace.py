"""Skip-trace search provider configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

SKIPTRACE_BASE_URL = "http://localhost:4000"
SKIPTRACE_SUBMIT_PATH = "/run-directskip"
SKIPTRACE_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True)
class SkipTraceConfig:
    """Holds search provider configuration values."""

    api_key: str
    submit_path: str
    resilience: ResilienceConfig


def get_skiptrace_config(*, resilience: ResilienceConfig | None = None) -> SkipTraceConfig:
    values = require_env_vars(("SKIPTRACE_API_KEY",))
    base_url = os.getenv("SKIPTRACE_BASE_URL") or SKIPTRACE_BASE_URL
    return SkipTraceConfig(
        api_key=values["SKIPTRACE_API_KEY"],
        submit_path=os.getenv("SKIPTRACE_SUBMIT_PATH") or SKIPTRACE_SUBMIT_PATH,
        resilience=resilience
        or ResilienceConfig(
            name="skiptrace",
            base_url=base_url,
            timeout_seconds=SKIPTRACE_TIMEOUT_SECONDS,
            # a batch submission is not idempotent on the provider side
            retry=RetryPolicy(total=0),
            ratelimit=RateLimit(max_calls=1, per_seconds=1.0),
        ),
    )
