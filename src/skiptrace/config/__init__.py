"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_float, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .lookup import PhoneLookupConfig, get_phone_lookup_config
from .pipeline import PipelineConfig, get_pipeline_config
from .skiptrace import SkipTraceConfig, get_skiptrace_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "PhoneLookupConfig",
    "PipelineConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SkipTraceConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_phone_lookup_config",
    "get_pipeline_config",
    "get_skiptrace_config",
    "get_storage_config",
    "optional_env_float",
    "require_env_vars",
]
