"""Per-(owner, property) unit of work tracked through the processing stages."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from skiptrace.domain.errors import InvalidStageTransitionError
from skiptrace.domain.model.base import Entity, utcnow
from skiptrace.domain.model.enums import PipelineStage

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime
    from uuid import UUID

STAGE_TRANSITIONS: Final[Mapping[PipelineStage, frozenset[PipelineStage]]] = MappingProxyType(
    {
        PipelineStage.APPROVED: frozenset({PipelineStage.SENT_TO_SEARCH}),
        PipelineStage.SENT_TO_SEARCH: frozenset(
            {PipelineStage.SEARCH_COMPLETED, PipelineStage.SEARCH_FAILED}
        ),
        PipelineStage.SEARCH_COMPLETED: frozenset(
            {PipelineStage.VALIDATION_PROCESSING, PipelineStage.SEARCH_FAILED}
        ),
        PipelineStage.VALIDATION_PROCESSING: frozenset(
            {PipelineStage.VALIDATION_COMPLETED, PipelineStage.SEARCH_FAILED}
        ),
        PipelineStage.VALIDATION_COMPLETED: frozenset(),
        PipelineStage.SEARCH_FAILED: frozenset(),
    }
)


def can_transition(current: PipelineStage, target: PipelineStage) -> bool:
    return target in STAGE_TRANSITIONS[current]


@dataclass(eq=False, kw_only=True)
class PipelineRecord(Entity):
    owner_id: str
    property_id: str
    stage: PipelineStage = PipelineStage.APPROVED
    decision: str | None = None
    identity_key: str | None = None
    contact_id: UUID | None = None
    property_details_id: UUID | None = None

    @property
    def is_terminal(self) -> bool:
        return not STAGE_TRANSITIONS[self.stage]

    def advance(self, target: PipelineStage, *, now: datetime | None = None) -> None:
        if not can_transition(self.stage, target):
            raise InvalidStageTransitionError(self.stage, target)
        self.stage = target
        self.touch(now or utcnow())

    def attach(
        self,
        *,
        contact_id: UUID | None,
        property_details_id: UUID | None,
        now: datetime | None = None,
    ) -> None:
        if contact_id is not None:
            self.contact_id = contact_id
        if property_details_id is not None:
            self.property_details_id = property_details_id
        self.touch(now or utcnow())
