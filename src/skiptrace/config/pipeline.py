"""Pipeline tuning values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_float

DEFAULT_INTER_CALL_DELAY_SECONDS = 0.2
DEFAULT_BACKOFF_BASE_DELAY_SECONDS = 2.0


@dataclass(slots=True, frozen=True)
class PipelineConfig:
    max_phones_saved: int = 3
    max_primary_validations: int = 3
    max_co_owner_validations: int = 2
    inter_call_delay_seconds: float = DEFAULT_INTER_CALL_DELAY_SECONDS
    backoff_base_delay_seconds: float = DEFAULT_BACKOFF_BASE_DELAY_SECONDS
    backoff_max_retries: int = 3


def get_pipeline_config() -> PipelineConfig:
    return PipelineConfig(
        inter_call_delay_seconds=optional_env_float(
            "SKIPTRACE_INTER_CALL_DELAY", DEFAULT_INTER_CALL_DELAY_SECONDS
        ),
        backoff_base_delay_seconds=optional_env_float(
            "SKIPTRACE_BACKOFF_BASE_DELAY", DEFAULT_BACKOFF_BASE_DELAY_SECONDS
        ),
    )
