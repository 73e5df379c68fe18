"""Search-result processing pipeline."""

from __future__ import annotations

from .coordinator import BatchReport, RecordOutcome, SearchResultCoordinator
from .submission import SubmissionReport, build_search_request, submit_for_search
from .validation import BackoffPolicy, PhoneValidationResult, PhoneValidator, ValidationRequest

__all__ = [
    "BackoffPolicy",
    "BatchReport",
    "PhoneValidationResult",
    "PhoneValidator",
    "RecordOutcome",
    "SearchResultCoordinator",
    "SubmissionReport",
    "ValidationRequest",
    "build_search_request",
    "submit_for_search",
]
