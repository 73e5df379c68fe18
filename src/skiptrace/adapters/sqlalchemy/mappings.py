"""SQLAlchemy mapping metadata for the skip-trace domain model."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import Any, cast

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from skiptrace.domain.model import (
    CallerIdLabel,
    Contact,
    Lookup,
    Ownership,
    OwnershipType,
    Phone,
    PipelineRecord,
    PipelineStage,
    PropertyDetails,
    PropertyList,
    PropertyListMembership,
    Relation,
    SearchStatus,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class StringListType(TypeDecorator[tuple[str, ...]]):
    """JSON array of strings stored in a text column."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: tuple[str, ...] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[str, ...]:
        _ = dialect
        if not value:
            return ()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return ()
        items = cast(list[Any], loaded)
        names: list[str] = []
        for item in items:
            if isinstance(item, str):
                names.append(item)
            elif isinstance(item, dict) and isinstance(item.get("name"), str):
                names.append(cast(str, item["name"]))
        return tuple(names)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _audit_columns() -> tuple[Column[Any], ...]:
    return (
        Column("created_at", UTCDateTime(), nullable=False),
        Column("updated_at", UTCDateTime(), nullable=True),
    )


# Canonical tables ------------------------------------------------------------

contact_table = Table(
    "contact",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("identity_key", String, nullable=False, unique=True),
    Column("first_name", String, nullable=False),
    Column("last_name", String, nullable=False),
    Column("mailing_address", String, nullable=True),
    Column("mailing_city", String, nullable=True),
    Column("mailing_state", String, nullable=True),
    Column("mailing_zip", String, nullable=True),
    Column("age", String, nullable=True),
    Column("deceased", String(1), nullable=True),
    Column("search_status", Enum(SearchStatus, native_enum=False, length=32), nullable=True),
    Column("searched_at", UTCDateTime(), nullable=True),
    *_audit_columns(),
)

lookup_table = Table(
    "lookup",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("phone_number", String, nullable=False, unique=True),
    Column(
        "caller_id_label",
        Enum(
            CallerIdLabel,
            native_enum=False,
            length=32,
            values_callable=lambda labels: [label.value for label in labels],
        ),
        nullable=True,
    ),
    Column("caller_name", String, nullable=True),
    Column("caller_name_error_code", String, nullable=True),
    Column("carrier_name", String, nullable=True),
    Column("carrier_type", String, nullable=True),
    Column("carrier_error_code", String, nullable=True),
    Column("mobile_country_code", String, nullable=True),
    Column("mobile_network_code", String, nullable=True),
    Column("country_code", String, nullable=True),
    Column("national_format", String, nullable=True),
    Column("record_type", String, nullable=True),
    Column("line_type", String, nullable=True),
    Column("lrn", String, nullable=True),
    Column("ocn", String, nullable=True),
    Column("ported_date", String, nullable=True),
    Column("ported_status", String, nullable=True),
    Column("spid", String, nullable=True),
    Column("spid_carrier_name", String, nullable=True),
    Column("spid_carrier_type", String, nullable=True),
    Column("altspid", String, nullable=True),
    Column("altspid_carrier_name", String, nullable=True),
    Column("altspid_carrier_type", String, nullable=True),
    Column("portability_city", String, nullable=True),
    Column("portability_state", String, nullable=True),
    *_audit_columns(),
)

phone_table = Table(
    "phone",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("contact_id", UUIDColumnType, ForeignKey("contact.id"), nullable=False),
    Column("number", String, nullable=False),
    Column("phone_type", String, nullable=True),
    Column("status", String, nullable=True),
    Column("validation_tag", String(8), nullable=True),
    Column("lookup_id", UUIDColumnType, ForeignKey("lookup.id"), nullable=True),
    *_audit_columns(),
    UniqueConstraint("contact_id", "number"),
    Index(None, "contact_id"),
)

relation_table = Table(
    "relation",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("from_contact_id", UUIDColumnType, ForeignKey("contact.id"), nullable=False),
    Column("to_contact_id", UUIDColumnType, ForeignKey("contact.id"), nullable=False),
    Column("relation_type", String(32), nullable=False),
    Column("confirmation_count", Integer, nullable=False, default=1),
    Column("confirmed_bidirectional", Boolean, nullable=False, default=False),
    Column("last_confirmed_at", UTCDateTime(), nullable=True),
    *_audit_columns(),
    UniqueConstraint("from_contact_id", "to_contact_id"),
)

property_details_table = Table(
    "property_details",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("identity_key", String, nullable=False, unique=True),
    Column("address", String, nullable=False),
    Column("city", String, nullable=True),
    Column("state", String, nullable=True),
    Column("zip", String, nullable=True),
    Column("contact_id", UUIDColumnType, ForeignKey("contact.id"), nullable=True),
    Column("bedrooms", String, nullable=True),
    Column("bathrooms", String, nullable=True),
    Column("square_feet", String, nullable=True),
    Column("year_built", String, nullable=True),
    Column("heating_type", String, nullable=True),
    Column("air_conditioner", String, nullable=True),
    Column("building_use_code", String, nullable=True),
    Column("parcel_id", String, nullable=True),
    Column("apn", String, nullable=True),
    Column("last_sale_price", String, nullable=True),
    Column("last_sold", String, nullable=True),
    Column("tax_delinquent_value", String, nullable=True),
    Column("years_behind_on_taxes", String, nullable=True),
    Column("foreclosure_date", String, nullable=True),
    Column("bankruptcy_recording_date", String, nullable=True),
    Column("lien_type", String, nullable=True),
    Column("cdu", String, nullable=True),
    *_audit_columns(),
)

property_list_table = Table(
    "property_list",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False, unique=True),
    *_audit_columns(),
)

property_list_membership_table = Table(
    "property_list_membership",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("property_id", UUIDColumnType, ForeignKey("property_details.id"), nullable=False),
    Column("list_id", UUIDColumnType, ForeignKey("property_list.id"), nullable=False),
    *_audit_columns(),
    UniqueConstraint("property_id", "list_id"),
)

ownership_table = Table(
    "ownership",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("property_id", UUIDColumnType, ForeignKey("property_details.id"), nullable=False),
    Column("contact_id", UUIDColumnType, ForeignKey("contact.id"), nullable=False),
    Column("is_primary", Boolean, nullable=False, default=False),
    Column(
        "ownership_type",
        Enum(
            OwnershipType,
            native_enum=False,
            length=32,
            values_callable=lambda types: [item.value for item in types],
        ),
        nullable=False,
    ),
    *_audit_columns(),
    UniqueConstraint("property_id", "contact_id"),
)

pipeline_record_table = Table(
    "pipeline_record",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("owner_id", String, nullable=False),
    Column("property_id", String, nullable=False),
    Column("stage", Enum(PipelineStage, native_enum=False, length=32), nullable=False),
    Column("decision", String, nullable=True),
    Column("identity_key", String, nullable=True),
    Column("contact_id", UUIDColumnType, ForeignKey("contact.id"), nullable=True),
    Column(
        "property_details_id",
        UUIDColumnType,
        ForeignKey("property_details.id"),
        nullable=True,
    ),
    *_audit_columns(),
    UniqueConstraint("owner_id", "property_id"),
    Index(None, "stage"),
)

# Candidate pool (read-only source tables filled by ingestion) ----------------

owner_record_table = Table(
    "owner_record",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("first_name", String, nullable=True),
    Column("last_name", String, nullable=True),
    Column("owner2_first_name", String, nullable=True),
    Column("owner2_last_name", String, nullable=True),
    Column("mailing_address", String, nullable=True),
    Column("mailing_city", String, nullable=True),
    Column("mailing_state", String, nullable=True),
    Column("mailing_zip", String, nullable=True),
)

property_record_table = Table(
    "property_record",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("address", String, nullable=True),
    Column("city", String, nullable=True),
    Column("state", String, nullable=True),
    Column("zip", String, nullable=True),
    Column("bedrooms", String, nullable=True),
    Column("bathrooms", String, nullable=True),
    Column("square_feet", String, nullable=True),
    Column("year_built", String, nullable=True),
    Column("heating_type", String, nullable=True),
    Column("air_conditioner", String, nullable=True),
    Column("building_use_code", String, nullable=True),
    Column("parcel_id", String, nullable=True),
    Column("apn", String, nullable=True),
    Column("last_sale_price", String, nullable=True),
    Column("last_sold", String, nullable=True),
    Column("tax_delinquent_value", String, nullable=True),
    Column("years_behind_on_taxes", String, nullable=True),
    Column("foreclosure_date", String, nullable=True),
    Column("bankruptcy_recording_date", String, nullable=True),
    Column("lien_type", String, nullable=True),
    Column("cdu", String, nullable=True),
    Column("lists", StringListType(), nullable=True),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Contact, contact_table)
    mapper_registry.map_imperatively(Lookup, lookup_table)
    mapper_registry.map_imperatively(Phone, phone_table)
    mapper_registry.map_imperatively(Relation, relation_table)
    mapper_registry.map_imperatively(PropertyDetails, property_details_table)
    mapper_registry.map_imperatively(PropertyList, property_list_table)
    mapper_registry.map_imperatively(PropertyListMembership, property_list_membership_table)
    mapper_registry.map_imperatively(Ownership, ownership_table)
    mapper_registry.map_imperatively(PipelineRecord, pipeline_record_table)

    configure_mappers()
    return mapper_registry
