"""Contact aggregate: people, their phones and the relations between them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from skiptrace.domain.model.base import Entity, utcnow

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from skiptrace.domain.model.enums import SearchStatus

RELATIVE_RELATION = "relative"
ACTIVE_PHONE_STATUS = "active"


@dataclass(eq=False, kw_only=True)
class Contact(Entity):
    """A canonical person, unique on the normalized (first, last, mailing address) key."""

    identity_key: str
    first_name: str
    last_name: str
    mailing_address: str | None = None
    mailing_city: str | None = None
    mailing_state: str | None = None
    mailing_zip: str | None = None
    age: str | None = None
    deceased: str | None = None
    search_status: SearchStatus | None = None
    searched_at: datetime | None = None

    @property
    def is_deceased(self) -> bool:
        return (self.deceased or "").strip().upper() == "Y"

    def mark_searched(self, status: SearchStatus, *, now: datetime | None = None) -> None:
        self.search_status = status
        self.searched_at = now or utcnow()


@dataclass(eq=False, kw_only=True)
class Phone(Entity):
    contact_id: UUID
    number: str
    phone_type: str | None = None
    status: str | None = None
    validation_tag: str | None = None
    lookup_id: UUID | None = None

    @property
    def is_validated(self) -> bool:
        return self.lookup_id is not None


@dataclass(eq=False, kw_only=True)
class Relation(Entity):
    """Undirected evidence edge between two contacts, stored once per pair."""

    from_contact_id: UUID
    to_contact_id: UUID
    relation_type: str = RELATIVE_RELATION
    confirmation_count: int = 1
    confirmed_bidirectional: bool = False
    last_confirmed_at: datetime | None = None

    def connects(self, a: UUID, b: UUID) -> bool:
        return {self.from_contact_id, self.to_contact_id} == {a, b}

    def confirm(self, *, from_contact_id: UUID, now: datetime | None = None) -> None:
        """Record another observation of this edge, seen from ``from_contact_id``."""

        self.confirmation_count += 1
        if from_contact_id == self.to_contact_id:
            self.confirmed_bidirectional = True
        self.last_confirmed_at = now or utcnow()
        self.touch(self.last_confirmed_at)
