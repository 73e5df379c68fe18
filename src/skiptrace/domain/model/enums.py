"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class PipelineStage(StrEnum):
    APPROVED = "APPROVED"
    SENT_TO_SEARCH = "SENT_TO_SEARCH"
    SEARCH_COMPLETED = "SEARCH_COMPLETED"
    SEARCH_FAILED = "SEARCH_FAILED"
    VALIDATION_PROCESSING = "VALIDATION_PROCESSING"
    VALIDATION_COMPLETED = "VALIDATION_COMPLETED"


class CallerIdLabel(StrEnum):
    """Coarse classification of a caller-name string against the contact's name."""

    IDMATCH = "IDMATCH"
    WC = "WC"
    NO_ID = "NoID"
    WRONG_NUMBER = "Wrong Number"


class SearchStatus(StrEnum):
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class OwnershipType(StrEnum):
    OWNER = "owner"
    CO_OWNER = "co-owner"


class PhoneSource(StrEnum):
    """Which contact a queued phone was selected from."""

    PRIMARY = "primary"
    CO_OWNER = "co_owner"
    RELATIVE = "relative"


class ValidationOutcome(StrEnum):
    VALIDATED = "validated"
    REUSED = "reused"
    DUPLICATE = "duplicate"
    SKIPPED = "skipped"


class SkipReason(StrEnum):
    LOOKUP_FAILED = "lookup_failed"
    VALIDATION_ERROR = "validation_error"
