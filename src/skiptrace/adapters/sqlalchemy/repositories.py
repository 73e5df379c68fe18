"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from dataclasses import fields
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, or_, select
from sqlalchemy.dialects import postgresql, sqlite

from skiptrace.adapters.sqlalchemy.mappings import (
    contact_table,
    lookup_table,
    ownership_table,
    phone_table,
    pipeline_record_table,
    property_details_table,
    property_list_membership_table,
    property_list_table,
    relation_table,
)
from skiptrace.domain.model import (
    Contact,
    Lookup,
    Ownership,
    Phone,
    PipelineRecord,
    PropertyDetails,
    PropertyList,
    PropertyListMembership,
    Relation,
    utcnow,
)
from skiptrace.domain.phones import tag_ordinal

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.orm import Session

    from skiptrace.domain.model import OwnershipType, PipelineStage


class SqlAlchemyContactRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Contact) -> None:
        self.session.add(entity)

    def get(self, contact_id: UUID) -> Contact | None:
        return self.session.get(Contact, contact_id)

    def find_by_identity_key(self, identity_key: str) -> Contact | None:
        stmt = select(Contact).where(contact_table.c.identity_key == identity_key)
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyPhoneRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Phone) -> None:
        self.session.add(entity)

    def list_for_contact(self, contact_id: UUID) -> list[Phone]:
        stmt = (
            select(Phone)
            .where(phone_table.c.contact_id == contact_id)
            .order_by(phone_table.c.created_at)
        )
        phones = list(self.session.execute(stmt).scalars())
        return sorted(phones, key=lambda phone: tag_ordinal(phone.validation_tag))

    def find_by_suffix(self, contact_id: UUID, last_ten: str) -> Phone | None:
        stmt = (
            select(Phone)
            .where(phone_table.c.contact_id == contact_id)
            .where(phone_table.c.number.endswith(last_ten, autoescape=True))
            .order_by(phone_table.c.lookup_id.is_(None), phone_table.c.created_at)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()


class SqlAlchemyLookupRepository:
    """Lookups are written with INSERT .. ON CONFLICT so concurrent writers converge."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, lookup_id: UUID) -> Lookup | None:
        return self.session.get(Lookup, lookup_id)

    def find_by_number(self, phone_number: str) -> Lookup | None:
        stmt = select(Lookup).where(lookup_table.c.phone_number == phone_number)
        return self.session.execute(stmt).scalar_one_or_none()

    def upsert(self, lookup: Lookup) -> Lookup:
        values: dict[str, Any] = {item.name: getattr(lookup, item.name) for item in fields(lookup)}
        updates = {
            name: value
            for name, value in values.items()
            if name not in {"id", "phone_number", "created_at"}
        }
        updates["updated_at"] = utcnow()

        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            insert_stmt = postgresql.insert(lookup_table).values(**values)
        elif dialect == "sqlite":
            insert_stmt = sqlite.insert(lookup_table).values(**values)
        else:
            return self._merge(lookup)
        stmt = insert_stmt.on_conflict_do_update(
            index_elements=[lookup_table.c.phone_number],
            set_=updates,
        )
        self.session.execute(stmt)
        reload = (
            select(Lookup)
            .where(lookup_table.c.phone_number == lookup.phone_number)
            .execution_options(populate_existing=True)
        )
        return self.session.execute(reload).scalar_one()

    def _merge(self, lookup: Lookup) -> Lookup:
        existing = self.find_by_number(lookup.phone_number)
        if existing is None:
            self.session.add(lookup)
            self.session.flush()
            return lookup
        for item in fields(lookup):
            if item.name in {"id", "phone_number", "created_at"}:
                continue
            setattr(existing, item.name, getattr(lookup, item.name))
        existing.touch()
        return existing


class SqlAlchemyRelationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Relation) -> None:
        self.session.add(entity)

    def find_between(self, first_id: UUID, second_id: UUID) -> Relation | None:
        stmt = select(Relation).where(
            or_(
                and_(
                    relation_table.c.from_contact_id == first_id,
                    relation_table.c.to_contact_id == second_id,
                ),
                and_(
                    relation_table.c.from_contact_id == second_id,
                    relation_table.c.to_contact_id == first_id,
                ),
            )
        )
        return self.session.execute(stmt).scalars().first()


class SqlAlchemyPropertyRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: PropertyDetails) -> None:
        self.session.add(entity)

    def get(self, property_details_id: UUID) -> PropertyDetails | None:
        return self.session.get(PropertyDetails, property_details_id)

    def find_by_identity_key(self, identity_key: str) -> PropertyDetails | None:
        stmt = select(PropertyDetails).where(property_details_table.c.identity_key == identity_key)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_or_create_list(self, name: str) -> PropertyList:
        stmt = select(PropertyList).where(property_list_table.c.name == name)
        existing = self.session.execute(stmt).scalar_one_or_none()
        if existing is not None:
            return existing
        property_list = PropertyList(name=name)
        self.session.add(property_list)
        return property_list

    def link_list(self, property_details_id: UUID, list_id: UUID) -> bool:
        stmt = (
            select(PropertyListMembership)
            .where(property_list_membership_table.c.property_id == property_details_id)
            .where(property_list_membership_table.c.list_id == list_id)
        )
        if self.session.execute(stmt).scalar_one_or_none() is not None:
            return False
        self.session.add(PropertyListMembership(property_id=property_details_id, list_id=list_id))
        return True

    def list_names(self, property_details_id: UUID) -> list[str]:
        stmt = (
            select(property_list_table.c.name)
            .join(
                property_list_membership_table,
                property_list_membership_table.c.list_id == property_list_table.c.id,
            )
            .where(property_list_membership_table.c.property_id == property_details_id)
            .order_by(property_list_table.c.name)
        )
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyOwnershipRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert(
        self,
        *,
        property_id: UUID,
        contact_id: UUID,
        is_primary: bool,
        ownership_type: OwnershipType,
    ) -> Ownership:
        stmt = (
            select(Ownership)
            .where(ownership_table.c.property_id == property_id)
            .where(ownership_table.c.contact_id == contact_id)
        )
        ownership = self.session.execute(stmt).scalar_one_or_none()
        if ownership is None:
            ownership = Ownership(
                property_id=property_id,
                contact_id=contact_id,
                is_primary=is_primary,
                ownership_type=ownership_type,
            )
            self.session.add(ownership)
            return ownership
        ownership.is_primary = is_primary
        ownership.ownership_type = ownership_type
        ownership.touch()
        return ownership

    def list_for_property(self, property_id: UUID) -> list[Ownership]:
        stmt = (
            select(Ownership)
            .where(ownership_table.c.property_id == property_id)
            .order_by(ownership_table.c.is_primary.desc(), ownership_table.c.created_at)
        )
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyPipelineRecordRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: PipelineRecord) -> None:
        self.session.add(entity)

    def get_by_pair(self, owner_id: str, property_id: str) -> PipelineRecord | None:
        stmt = (
            select(PipelineRecord)
            .where(pipeline_record_table.c.owner_id == owner_id)
            .where(pipeline_record_table.c.property_id == property_id)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list_by_stage(self, stage: PipelineStage) -> list[PipelineRecord]:
        stmt = (
            select(PipelineRecord)
            .where(pipeline_record_table.c.stage == stage)
            .order_by(pipeline_record_table.c.created_at)
        )
        return list(self.session.execute(stmt).scalars())
