"""Domain error taxonomy for the skip-trace pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from skiptrace.domain.model.enums import PipelineStage


class SkipTraceError(Exception):
    """Base class for domain failures raised by the pipeline core."""


class InvalidPhoneNumberError(SkipTraceError, ValueError):
    """Raised when a phone number has no digits to normalize."""

    def __init__(self, raw: str | None) -> None:
        super().__init__(f"Not a phone number: {raw!r}")
        self.raw = raw


class InvalidStageTransitionError(SkipTraceError, RuntimeError):
    """Raised when a pipeline record is moved along an edge the stage graph forbids."""

    def __init__(self, current: PipelineStage, target: PipelineStage) -> None:
        super().__init__(f"Cannot move pipeline record from {current} to {target}")
        self.current = current
        self.target = target


class PipelineRecordNotFoundError(SkipTraceError, LookupError):
    """Raised when a search result refers to an unknown (owner, property) pair."""

    def __init__(self, owner_id: str, property_id: str) -> None:
        super().__init__(f"No pipeline record for owner={owner_id} property={property_id}")
        self.owner_id = owner_id
        self.property_id = property_id
