"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from skiptrace.domain.model import (
    Contact,
    Lookup,
    Ownership,
    OwnershipType,
    Phone,
    PipelineRecord,
    PipelineStage,
    PropertyDetails,
    PropertyList,
    Relation,
)

if TYPE_CHECKING:
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class ContactRepository(Repository[Contact], Protocol):
    def get(self, contact_id: UUID) -> Contact | None: ...

    def find_by_identity_key(self, identity_key: str) -> Contact | None: ...


@runtime_checkable
class PhoneRepository(Repository[Phone], Protocol):
    def list_for_contact(self, contact_id: UUID) -> list[Phone]:
        """Return the contact's phones ordered by validation tag."""
        ...

    def find_by_suffix(self, contact_id: UUID, last_ten: str) -> Phone | None: ...


@runtime_checkable
class LookupRepository(Protocol):
    def get(self, lookup_id: UUID) -> Lookup | None: ...

    def find_by_number(self, phone_number: str) -> Lookup | None: ...

    def upsert(self, lookup: Lookup) -> Lookup:
        """Insert or overwrite by phone number and return the stored row."""
        ...


@runtime_checkable
class RelationRepository(Repository[Relation], Protocol):
    def find_between(self, first_id: UUID, second_id: UUID) -> Relation | None:
        """Return the edge joining the two contacts in either direction."""
        ...


@runtime_checkable
class PropertyRepository(Repository[PropertyDetails], Protocol):
    def get(self, property_details_id: UUID) -> PropertyDetails | None: ...

    def find_by_identity_key(self, identity_key: str) -> PropertyDetails | None: ...

    def get_or_create_list(self, name: str) -> PropertyList: ...

    def link_list(self, property_details_id: UUID, list_id: UUID) -> bool:
        """Add list membership; return False when it already existed."""
        ...

    def list_names(self, property_details_id: UUID) -> list[str]: ...


@runtime_checkable
class OwnershipRepository(Protocol):
    def upsert(
        self,
        *,
        property_id: UUID,
        contact_id: UUID,
        is_primary: bool,
        ownership_type: OwnershipType,
    ) -> Ownership: ...

    def list_for_property(self, property_id: UUID) -> list[Ownership]: ...


@runtime_checkable
class PipelineRecordRepository(Repository[PipelineRecord], Protocol):
    def get_by_pair(self, owner_id: str, property_id: str) -> PipelineRecord | None: ...

    def list_by_stage(self, stage: PipelineStage) -> list[PipelineRecord]: ...
