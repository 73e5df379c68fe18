"""Skip-trace search service adapter."""

from __future__ import annotations

from .client import SkipTraceAPIError, SkipTraceClient
from .results import parse_search_result, read_search_results
from .schema import SkipTraceSearchResponse, SkipTraceWebhook
from .translator import translate_response, translate_webhook

__all__ = [
    "SkipTraceAPIError",
    "SkipTraceClient",
    "SkipTraceSearchResponse",
    "SkipTraceWebhook",
    "parse_search_result",
    "read_search_results",
    "translate_response",
    "translate_webhook",
]
