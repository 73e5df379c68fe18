"""Per-record processing state shared by the persistence helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from skiptrace.domain.model import utcnow

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(slots=True)
class ResolutionRun:
    """Tracks which contacts were already written while handling one search result."""

    started_at: datetime = field(default_factory=utcnow)
    processed_contact_ids: set[UUID] = field(default_factory=set)

    def first_visit(self, contact_id: UUID) -> bool:
        """Return True the first time ``contact_id`` is seen, marking it as processed."""

        if contact_id in self.processed_contact_ids:
            return False
        self.processed_contact_ids.add(contact_id)
        return True
